"""Runtime settings for the calculator, read from the environment (.env supported via app.py)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

from mortgage.models import EnergyLabel

LOG_LEVEL_ENV = "MORTGAGE_LOG_LEVEL"
DEFAULT_INCOME_ENV = "MORTGAGE_DEFAULT_INCOME"
DEFAULT_HOME_VALUE_ENV = "MORTGAGE_DEFAULT_HOME_VALUE"
DEFAULT_RATE_PCT_ENV = "MORTGAGE_DEFAULT_RATE_PCT"
DEFAULT_DURATION_ENV = "MORTGAGE_DEFAULT_DURATION_YEARS"
DEFAULT_ENERGY_LABEL_ENV = "MORTGAGE_DEFAULT_ENERGY_LABEL"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    default_income: float = 75000.0
    default_home_value: float = 400000.0
    default_rate_pct: float = 3.5
    default_duration_years: int = 30
    default_energy_label: EnergyLabel = EnergyLabel.C


def _read_float(environ: Mapping[str, str], name: str, fallback: float) -> float:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return fallback
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _read_int(environ: Mapping[str, str], name: str, fallback: int) -> int:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return fallback
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {raw!r}")


def load_settings(environ: Mapping[str, str]) -> Settings:
    defaults = Settings()

    label_raw = (environ.get(DEFAULT_ENERGY_LABEL_ENV) or "").strip().upper()
    try:
        energy_label = EnergyLabel.parse(label_raw) if label_raw else defaults.default_energy_label
    except ValueError:
        raise ValueError(f"{DEFAULT_ENERGY_LABEL_ENV} must be one of A-G, got {label_raw!r}")

    return Settings(
        log_level=(environ.get(LOG_LEVEL_ENV) or defaults.log_level).strip().upper(),
        default_income=_read_float(environ, DEFAULT_INCOME_ENV, defaults.default_income),
        default_home_value=_read_float(environ, DEFAULT_HOME_VALUE_ENV, defaults.default_home_value),
        default_rate_pct=_read_float(environ, DEFAULT_RATE_PCT_ENV, defaults.default_rate_pct),
        default_duration_years=_read_int(environ, DEFAULT_DURATION_ENV, defaults.default_duration_years),
        default_energy_label=energy_label,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings(os.environ)
