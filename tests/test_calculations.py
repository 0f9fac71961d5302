import math

import pytest

from mortgage.calculations import (
    INCOME_MULTIPLIER,
    compute_monthly_payment,
    compute_mortgage,
    household_income,
)
from mortgage.models import DomainError, EnergyLabel


@pytest.mark.parametrize(
    "principal, rate, count, expected",
    [
        (200000, 0.05, 360, 1073.64),
        (150000, 0.04, 180, 1109.53),
        (100000, 0.08, 360, 733.76),
        (100000, 0.06, 360, 599.55),
        (1000000, 0.07, 360, 6653.02),
        (1000, 0.03, 6, 168.13),
    ],
)
def test_monthly_payment_known_values(principal, rate, count, expected):
    assert compute_monthly_payment(principal, rate, count) == pytest.approx(expected, abs=0.005)


def test_monthly_payment_matches_annuity_formula():
    r = 0.06 / 12
    growth = (1 + r) ** 360
    expected = 100000 * (r * growth) / (growth - 1)
    assert compute_monthly_payment(100000, 0.06, 360) == pytest.approx(expected, rel=1e-12)


def test_zero_rate_is_straight_division():
    assert compute_monthly_payment(120000, 0, 24) == 5000
    assert compute_monthly_payment(1000, 0, 7) == 1000 / 7


@pytest.mark.parametrize("rate", [0, 0.0001, 0.05, 0.5])
def test_zero_principal_pays_nothing(rate):
    assert compute_monthly_payment(0, rate, 360) == 0


def test_single_payment_adds_one_month_of_interest():
    assert compute_monthly_payment(50000, 0.06, 1) == pytest.approx(50250)
    assert compute_monthly_payment(50000, 0.06, 1) == pytest.approx(50000 * (1 + 0.06 / 12))


def test_small_principal_and_low_rate():
    assert compute_monthly_payment(1, 0.05, 12) == pytest.approx(0.0856, abs=0.00005)
    assert compute_monthly_payment(100000, 0.0001, 360) == pytest.approx(278.2, abs=0.01)


def test_payment_increases_with_rate():
    payments = [compute_monthly_payment(200000, rate, 360) for rate in (0, 0.01, 0.02, 0.05, 0.1, 0.2)]
    assert payments == sorted(payments)
    assert len(set(payments)) == len(payments)


def test_payment_is_finite_and_non_negative_across_inputs():
    for principal in (0, 1, 199999.99, 1e7):
        for rate in (0, 0.0499, 0.5):
            for count in (1, 12, 359, 600):
                payment = compute_monthly_payment(principal, rate, count)
                assert payment >= 0
                assert math.isfinite(payment)


@pytest.mark.parametrize(
    "args, field, message",
    [
        ((-100000, 0.05, 360), "principal", "Principal must be non-negative"),
        ((100000, -0.05, 360), "annual_rate", "Interest rate must be non-negative"),
        ((100000, 0.05, 0), "payment_count", "Number of payments must be positive"),
        ((100000, 0.05, -12), "payment_count", "Number of payments must be positive"),
    ],
)
def test_monthly_payment_rejects_bad_input(args, field, message):
    with pytest.raises(DomainError, match=message) as excinfo:
        compute_monthly_payment(*args)
    assert excinfo.value.field == field


def test_domain_error_is_a_value_error():
    with pytest.raises(ValueError):
        compute_monthly_payment(-1, 0.05, 12)


def test_mortgage_for_a_label_home():
    result = compute_mortgage(75000, 400000, "A", 0.035, 30)

    assert result.base_capacity == 337500
    assert result.energy_label_adjustment == 10000
    assert result.revised_capacity == 347500
    assert result.appraised_value == 400000
    assert result.final_loan_amount == 347500
    assert result.out_of_pocket == 52500
    assert result.energy_label is EnergyLabel.A
    assert result.monthly_payment == pytest.approx(1560.43, abs=0.005)


def test_mortgage_for_high_income_g_label_home():
    result = compute_mortgage(100000, 500000, "G", 0.04, 30)

    assert result.base_capacity == 450000
    assert result.energy_label_adjustment == -17750
    assert result.revised_capacity == 432250
    assert result.final_loan_amount == 432250
    assert result.out_of_pocket == 67750


def test_mortgage_e_label_in_middle_income_band():
    result = compute_mortgage(45000, 300000, EnergyLabel.E, 0.035, 25)

    assert result.base_capacity == 202500
    assert result.energy_label_adjustment == -5500
    assert result.revised_capacity == 197000
    assert result.final_loan_amount == 197000
    assert result.out_of_pocket == 103000


def test_appraised_value_caps_the_loan():
    result = compute_mortgage(100000, 400000, "B", 0.04, 25, appraised_value=380000)

    assert result.revised_capacity == 460000
    assert result.appraised_value == 380000
    assert result.final_loan_amount == 380000
    assert result.out_of_pocket == 20000
    assert result.monthly_payment == compute_monthly_payment(380000, 0.04, 300)


def test_appraisal_below_home_value_with_fractional_income():
    result = compute_mortgage(375000 / 4.5, 400000, "B", 0.035, 30, appraised_value=375000)

    assert result.base_capacity == pytest.approx(375000)
    assert result.revised_capacity == pytest.approx(385000)
    assert result.final_loan_amount == 375000
    assert result.out_of_pocket == 25000


def test_home_value_is_the_default_cap():
    result = compute_mortgage(200000, 300000, "A", 0.03, 30)

    assert result.appraised_value == 300000
    assert result.final_loan_amount == 300000
    assert result.out_of_pocket == 0


def test_negative_capacity_is_clamped_to_zero_loan():
    result = compute_mortgage(1000, 300000, "G", 0.04, 30)

    assert result.revised_capacity == 1000 * INCOME_MULTIPLIER - 5500
    assert result.final_loan_amount == 0
    assert result.out_of_pocket == 300000
    assert result.monthly_payment == 0


def test_cap_invariants_hold_over_a_grid():
    for income in (1000, 30000, 45000, 75000, 120000, 250000):
        for home_value in (50000, 300000, 900000):
            for label in EnergyLabel:
                for appraised in (None, home_value * 0.9, home_value * 1.1):
                    result = compute_mortgage(income, home_value, label, 0.04, 30, appraised)
                    assert 0 <= result.final_loan_amount <= result.appraised_value
                    assert result.out_of_pocket >= 0
                    assert result.monthly_payment >= 0


def test_result_is_a_value():
    first = compute_mortgage(75000, 400000, "C", 0.035, 30)
    second = compute_mortgage(75000, 400000, EnergyLabel.C, 0.035, 30)
    assert first == second
    with pytest.raises(AttributeError):
        first.final_loan_amount = 0


@pytest.mark.parametrize(
    "args, kwargs, field, message",
    [
        ((-50000, 300000, "C", 0.04, 30), {}, "income", "Income must be positive"),
        ((0, 300000, "C", 0.04, 30), {}, "income", "Income must be positive"),
        ((50000, -300000, "C", 0.04, 30), {}, "home_value", "Home value must be positive"),
        ((50000, 300000, "C", -0.04, 30), {}, "annual_rate", "Interest rate must be non-negative"),
        ((50000, 300000, "C", 0.04, 0), {}, "duration_years", "Duration must be positive"),
        ((50000, 300000, "C", 0.04, 30), {"appraised_value": 0}, "appraised_value", "Appraised value must be positive"),
        ((50000, 300000, "Z", 0.04, 30), {}, "label", "Energy label must be A, B, C, D, E, F, or G"),
    ],
)
def test_mortgage_rejects_bad_input(args, kwargs, field, message):
    with pytest.raises(DomainError, match=message) as excinfo:
        compute_mortgage(*args, **kwargs)
    assert excinfo.value.field == field


def test_household_income():
    assert household_income(50000) == 50000
    assert household_income(50000, 30000, buying_alone=True) == 50000
    assert household_income(50000, 30000, buying_alone=False) == 80000
    assert household_income(50000, None, buying_alone=False) == 50000


@pytest.mark.parametrize("rate", [1e-17, 1e-300, 5e-324])
def test_rate_too_small_to_move_one_plus_r(rate):
    payment = compute_monthly_payment(100000, rate, 360)
    assert math.isfinite(payment)
    assert payment == pytest.approx(100000 / 360)


def test_very_long_term_tends_to_interest_only():
    payment = compute_monthly_payment(100000, 0.5, 20000)
    assert math.isfinite(payment)
    assert payment == pytest.approx(100000 * 0.5 / 12)


@pytest.mark.parametrize(
    "args, field",
    [
        ((math.nan, 0.05, 360), "principal"),
        ((100000, math.nan, 360), "annual_rate"),
        ((100000, 0.05, math.nan), "payment_count"),
    ],
)
def test_monthly_payment_rejects_nan(args, field):
    with pytest.raises(DomainError) as excinfo:
        compute_monthly_payment(*args)
    assert excinfo.value.field == field


@pytest.mark.parametrize(
    "args, field",
    [
        ((math.nan, 300000, "C", 0.04, 30), "income"),
        ((50000, math.nan, "C", 0.04, 30), "home_value"),
        ((50000, 300000, "C", math.nan, 30), "annual_rate"),
        ((50000, 300000, "C", 0.04, math.nan), "duration_years"),
    ],
)
def test_mortgage_rejects_nan(args, field):
    with pytest.raises(DomainError) as excinfo:
        compute_mortgage(*args)
    assert excinfo.value.field == field


def test_mortgage_rejects_nan_appraisal():
    with pytest.raises(DomainError, match="Appraised value must be positive"):
        compute_mortgage(50000, 300000, "C", 0.04, 30, appraised_value=math.nan)
