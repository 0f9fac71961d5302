from __future__ import annotations

import logging
import math

from .energy import compute_energy_adjustment
from .models import DomainError, EnergyLabel, MortgageCalculationResult

logger = logging.getLogger(__name__)

INCOME_MULTIPLIER = 4.5


def _reject(field: str, message: str) -> DomainError:
    logger.warning("Rejected %s: %s", field, message)
    return DomainError(field, message)


def compute_monthly_payment(principal: float, annual_rate: float, payment_count: int) -> float:
    """
    Standard fixed-rate amortization payment:
      M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    where r = annual_rate/12 and n = payment_count.

    Evaluated as P * r / (1 - (1+r)^-n) through log1p/expm1, which stays
    finite for rates too small to change 1 + r and for very long terms.
    annual_rate is a decimal fraction (0.05 for 5%). No rounding is applied.
    """
    if not principal >= 0:
        raise _reject("principal", "Principal must be non-negative")
    if not annual_rate >= 0:
        raise _reject("annual_rate", "Interest rate must be non-negative")
    if not payment_count > 0:
        raise _reject("payment_count", "Number of payments must be positive")

    if principal == 0:
        return 0.0
    if annual_rate == 0:
        return principal / payment_count

    r = annual_rate / 12.0
    den = -math.expm1(-payment_count * math.log1p(r))
    if den == 0:
        # r underflowed to zero
        return principal / payment_count
    return principal * r / den


def household_income(income: float, partner_income: float | None = None, buying_alone: bool = True) -> float:
    # Partner income only counts for a joint purchase
    if buying_alone or partner_income is None:
        return income
    return income + partner_income


def compute_mortgage(
    income: float,
    home_value: float,
    label,
    annual_rate: float,
    duration_years: int,
    appraised_value: float | None = None,
) -> MortgageCalculationResult:
    """
    Maximum mortgage and monthly payment for a purchase.

    Capacity is income × 4.5 plus the energy-label adjustment, capped by the
    appraised value (the home value when no appraisal is given). The loan
    never goes below zero; whatever it does not cover is paid out of pocket.
    """
    if not income > 0:
        raise _reject("income", "Income must be positive")
    if not home_value > 0:
        raise _reject("home_value", "Home value must be positive")
    if not annual_rate >= 0:
        raise _reject("annual_rate", "Interest rate must be non-negative")
    if not duration_years > 0:
        raise _reject("duration_years", "Duration must be positive")
    if appraised_value is not None and not appraised_value > 0:
        raise _reject("appraised_value", "Appraised value must be positive")

    appraised_value_final = home_value if appraised_value is None else appraised_value

    base_capacity = income * INCOME_MULTIPLIER
    adjustment = compute_energy_adjustment(label, income)
    revised_capacity = base_capacity + adjustment
    final_loan_amount = max(0.0, min(revised_capacity, appraised_value_final))
    out_of_pocket = max(0.0, home_value - final_loan_amount)
    payment_count = duration_years * 12
    monthly_payment = compute_monthly_payment(final_loan_amount, annual_rate, payment_count)

    result = MortgageCalculationResult(
        home_value=home_value,
        base_capacity=base_capacity,
        energy_label_adjustment=adjustment,
        revised_capacity=revised_capacity,
        appraised_value=appraised_value_final,
        final_loan_amount=final_loan_amount,
        out_of_pocket=out_of_pocket,
        monthly_payment=monthly_payment,
        energy_label=EnergyLabel.parse(label),
    )
    logger.debug(
        "Mortgage for income=%.2f label=%s: loan=%.2f monthly=%.2f",
        income,
        result.energy_label.value,
        final_loan_amount,
        monthly_payment,
    )
    return result
