"""
Calculator constants and runtime settings.

Monetary values are USD. Contribution limits are keyed by tax year; years
past the end of the table reuse the latest known limit.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# ── Amortization ─────────────────────────────────────────────────────
MONTHS_PER_YEAR = 12
PERIODS_PER_YEAR = {
    "monthly": 12,
    "biweekly": 26,
    "weekly": 52,
}
# Hard stop for the schedule loop; 100 years of weekly payments.
MAX_SCHEDULE_PERIODS = 5_200
# Largest loan accepted by the projectors.
MAX_TERM_YEARS = 50
MAX_RATE_PERCENT = 100.0
BALANCE_EPSILON = 1e-6
DEFAULT_ROUND_UP_INCREMENT = 100.0

# ── Roth IRA ─────────────────────────────────────────────────────────
CONTRIBUTION_LIMITS: Dict[int, float] = {
    2019: 6_000,
    2020: 6_000,
    2021: 6_000,
    2022: 6_000,
    2023: 6_500,
    2024: 7_000,
    2025: 7_000,
}
CATCH_UP_AMOUNT = 1_000.0
CATCH_UP_AGE = 50
COMPOUNDING_CHOICES = (1, 2, 4, 12)
MAX_PROJECTION_YEARS = 120

# ── Debt-to-income ───────────────────────────────────────────────────
DTI_BACK_END_LIMIT = 43.0      # conventional mortgage ceiling
DTI_FRONT_END_LIMIT = 28.0     # housing-only guideline
DISPOSABLE_INCOME_FLOOR = 0.20  # share of income left after debts


def contribution_limit(tax_year: Optional[int] = None) -> float:
    """Return the annual contribution cap for ``tax_year``.

    ``None`` selects the most recent year in the table. Years before the
    table start use the earliest entry.
    """
    years = sorted(CONTRIBUTION_LIMITS)
    if tax_year is None:
        return float(CONTRIBUTION_LIMITS[years[-1]])
    eligible = [year for year in years if year <= tax_year]
    chosen = eligible[-1] if eligible else years[0]
    return float(CONTRIBUTION_LIMITS[chosen])


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    """Process-level settings for the HTTP app."""

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )
    log_level: str = "INFO"
    max_schedule_periods: int = Field(default=MAX_SCHEDULE_PERIODS, ge=1)

    @classmethod
    def from_env(cls) -> "Settings":
        values: Dict[str, object] = {}
        origins = os.environ.get("FINCALC_CORS_ORIGINS")
        if origins:
            values["cors_origins"] = _split_origins(origins)
        level = os.environ.get("FINCALC_LOG_LEVEL")
        if level:
            values["log_level"] = level.upper()
        cap = os.environ.get("FINCALC_MAX_SCHEDULE_PERIODS")
        if cap:
            values["max_schedule_periods"] = int(cap)
        return cls.model_validate(values)
