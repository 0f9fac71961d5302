"""Borrowing-capacity adjustment by energy label (2025 lending rules)."""

from __future__ import annotations

import logging

from .models import DomainError, EnergyLabel

logger = logging.getLogger(__name__)

EFFICIENT_BONUS = 10000.0
PENALTY_FLOOR = -5500.0
PENALTY_SCALED_MAX = 24500.0

# Income breakpoints for the E/F/G penalty
PENALTY_SCALE_START = 50000.0
PENALTY_SCALE_SPAN = 100000.0

ENERGY_LABEL_COLORS = {
    EnergyLabel.A: "#00a651",
    EnergyLabel.B: "#8ac83b",
    EnergyLabel.C: "#ffd502",
    EnergyLabel.D: "#ffa500",
    EnergyLabel.E: "#ff6600",
    EnergyLabel.F: "#ff3300",
    EnergyLabel.G: "#cc0000",
}


def _parse_label(label) -> EnergyLabel:
    try:
        return EnergyLabel.parse(label)
    except ValueError:
        logger.warning("Unknown energy label: %r", label)
        raise DomainError("label", "Energy label must be A, B, C, D, E, F, or G")


def compute_energy_adjustment(label, income: float) -> float:
    """
    Signed change to borrowing capacity for a property's energy label.

      A, B    -> +10,000
      C, D    -> 0
      E, F, G -> -5,500 up to an income of 50,000, then scaled linearly
                 down to -30,000 at an income of 150,000 and above.

    Income is not validated here; anything at or below 50,000 (including
    zero or negative values) gets the -5,500 floor.
    """
    label = _parse_label(label)

    if label in (EnergyLabel.A, EnergyLabel.B):
        return EFFICIENT_BONUS
    if label in (EnergyLabel.C, EnergyLabel.D):
        return 0.0

    if income <= PENALTY_SCALE_START:
        return PENALTY_FLOOR

    scaling_factor = min((income - PENALTY_SCALE_START) / PENALTY_SCALE_SPAN, 1.0)
    return PENALTY_FLOOR - PENALTY_SCALED_MAX * scaling_factor


def describe_adjustment(label, income: float) -> str:
    label = _parse_label(label)
    adjustment = compute_energy_adjustment(label, income)
    if adjustment > 0:
        return f"Label {label.value}: you can borrow €{adjustment:,.0f} more for an energy-efficient home."
    if adjustment < 0:
        return f"Label {label.value}: your borrowing capacity is reduced by €{-adjustment:,.0f}."
    return f"Label {label.value}: no adjustment to your borrowing capacity."
