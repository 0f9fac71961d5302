from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EnergyLabel(str, Enum):
    """Energy-efficiency grade of a property, A (best) through G (worst)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"

    @classmethod
    def parse(cls, value) -> "EnergyLabel":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"{value!r} is not a valid EnergyLabel")


class DomainError(ValueError):
    """Raised when a calculation is called with input that should have been validated."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)


@dataclass(frozen=True)
class FormValidation:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MortgageCalculationResult:
    home_value: float
    base_capacity: float
    energy_label_adjustment: float
    revised_capacity: float
    appraised_value: float
    final_loan_amount: float
    out_of_pocket: float
    monthly_payment: float
    energy_label: EnergyLabel

    def as_rows(self) -> list[tuple[str, float]]:
        # display order of the breakdown table
        return [
            ("Home value", self.home_value),
            ("Base capacity", self.base_capacity),
            (f"Energy label {self.energy_label.value} adjustment", self.energy_label_adjustment),
            ("Revised capacity", self.revised_capacity),
            ("Appraised value", self.appraised_value),
            ("Maximum mortgage", self.final_loan_amount),
            ("Out of pocket", self.out_of_pocket),
            ("Monthly payment", self.monthly_payment),
        ]
