"""Field validators for the mortgage form. Validators report problems as data and never raise."""

from __future__ import annotations

import math

from .models import EnergyLabel, FormValidation, ValidationResult

MAX_INCOME = 10_000_000
MAX_INTEREST_RATE_PCT = 50
MAX_DURATION_YEARS = 50


def _as_number(value) -> float | None:
    if value is None or isinstance(value, (bool, complex)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    except OverflowError:
        # int or Fraction beyond float range
        return math.inf if value > 0 else -math.inf
    if math.isnan(number):
        return None
    return number


def _or_zero(value):
    # A blank partner income on a joint purchase counts as 0
    return 0 if _as_number(value) is None else value


def _validate_amount(value, required_msg: str, positive_msg: str, too_high_msg: str) -> ValidationResult:
    number = _as_number(value)
    if number is None:
        return ValidationResult.fail(required_msg)
    if number <= 0:
        return ValidationResult.fail(positive_msg)
    if number > MAX_INCOME:
        return ValidationResult.fail(too_high_msg)
    return ValidationResult.ok()


def validate_income(value) -> ValidationResult:
    return _validate_amount(
        value,
        "Income amount is required",
        "Income must be greater than 0",
        "Income amount seems unreasonably high",
    )


def validate_partner_income(value, is_joint: bool) -> ValidationResult:
    # Only relevant when buying together
    if not is_joint:
        return ValidationResult.ok()
    return _validate_amount(
        value,
        "Partner income is required when buying together",
        "Partner income must be greater than 0",
        "Partner income amount seems unreasonably high",
    )


def validate_interest_rate(value) -> ValidationResult:
    """Annual rate in percent, e.g. 3.5 for 3.5%."""
    number = _as_number(value)
    if number is None:
        return ValidationResult.fail("Interest rate is required")
    if number < 0:
        return ValidationResult.fail("Interest rate cannot be negative")
    if number > MAX_INTEREST_RATE_PCT:
        return ValidationResult.fail("Interest rate cannot exceed 50%")
    return ValidationResult.ok()


def validate_duration(value) -> ValidationResult:
    number = _as_number(value)
    if number is None:
        return ValidationResult.fail("Duration is required")
    if number <= 0:
        return ValidationResult.fail("Duration must be greater than 0 years")
    if math.isfinite(number) and not number.is_integer():
        return ValidationResult.fail("Duration must be a whole number of years")
    if number > MAX_DURATION_YEARS:
        return ValidationResult.fail("Duration cannot exceed 50 years")
    return ValidationResult.ok()


def validate_buying_type(value) -> ValidationResult:
    # True = buying alone, False = buying together
    if value is None:
        return ValidationResult.fail("You have not answered the question. This is mandatory.")
    return ValidationResult.ok()


def validate_energy_label(value) -> ValidationResult:
    if value is None:
        return ValidationResult.fail("Energy label is required")
    try:
        EnergyLabel.parse(value)
    except ValueError:
        return ValidationResult.fail("Energy label must be A, B, C, D, E, F, or G")
    return ValidationResult.ok()


def validate_home_value(value) -> ValidationResult:
    number = _as_number(value)
    if number is None:
        return ValidationResult.fail("Home value is required")
    if number <= 0:
        return ValidationResult.fail("Home value must be greater than 0")
    return ValidationResult.ok()


def validate_appraised_value(value) -> ValidationResult:
    # Optional; the home value is used when no appraisal is given
    if value is None:
        return ValidationResult.ok()
    number = _as_number(value)
    if number is None or number <= 0:
        return ValidationResult.fail("Appraised value must be greater than 0")
    return ValidationResult.ok()


def validate_all(
    income,
    annual_rate,
    duration_years,
    buying_alone=None,
    energy_label=None,
    partner_income=None,
) -> FormValidation:
    """
    Run every field validator and collect the failures.

    All fields are checked on every call, so the returned errors map holds a
    message for each failing field at once. Partner income is only checked
    when buying together (buying_alone is False); a missing partner income
    is checked as 0.
    """
    results = {
        "income": validate_income(income),
        "interest_rate": validate_interest_rate(annual_rate),
        "duration": validate_duration(duration_years),
        "buying_type": validate_buying_type(buying_alone),
        "energy_label": validate_energy_label(energy_label),
        "partner_income": validate_partner_income(_or_zero(partner_income), buying_alone is False),
    }
    errors = {name: result.message for name, result in results.items() if not result.is_valid}
    return FormValidation(is_valid=not errors, errors=errors)
