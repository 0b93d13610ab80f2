"""
Roth IRA style compound growth projection.

Conventions (per year, from current_age through target_age inclusive):
  1) The year's contribution is capped (base + catch-up, never above the cap).
  2) The contribution is spread evenly over the compounding sub-periods and
     each slice compounds with the balance from the sub-period it lands in.
  3) The base contribution grows by the contribution growth rate for next year.
"""

from __future__ import annotations

import logging
import math
from typing import List

from fincalc import config as cfg
from fincalc.domain.errors import InvalidParameterError
from fincalc.models import RetirementAccountParameters, YearlyProjectionEntry

logger = logging.getLogger(__name__)


def effective_rate_percent(params: RetirementAccountParameters) -> float:
    return params.annual_return_percent - params.management_fee_percent


def contribution_cap(params: RetirementAccountParameters, year_index: int) -> float:
    if params.contribution_cap is not None:
        return params.contribution_cap
    tax_year = params.start_year + year_index if params.start_year is not None else None
    return cfg.contribution_limit(tax_year)


def capped_contribution(
    params: RetirementAccountParameters,
    base_contribution: float,
    age: int,
    year_index: int,
) -> float:
    catch_up = cfg.CATCH_UP_AMOUNT if params.catch_up_enabled and age >= cfg.CATCH_UP_AGE else 0.0
    return min(base_contribution + catch_up, contribution_cap(params, year_index))


def inflation_adjusted(final_balance: float, inflation_percent: float, years: int) -> float:
    """Deflate ``final_balance`` back to today's dollars."""
    try:
        adjusted = final_balance * (1 + inflation_percent / 100) ** (-years)
    except OverflowError:
        adjusted = math.inf
    if not math.isfinite(adjusted):
        raise InvalidParameterError("inflation_percent", "deflates the balance beyond a representable amount")
    return adjusted


def validate_retirement(params: RetirementAccountParameters) -> None:
    if params.target_age <= params.current_age:
        raise InvalidParameterError("target_age", "must be greater than current_age")
    if params.years > cfg.MAX_PROJECTION_YEARS:
        raise InvalidParameterError("target_age", f"must be within {cfg.MAX_PROJECTION_YEARS} years of current_age")
    if params.current_age < 0:
        raise InvalidParameterError("current_age", "must not be negative")
    if params.current_balance < 0:
        raise InvalidParameterError("current_balance", "must not be negative")
    if params.annual_contribution < 0:
        raise InvalidParameterError("annual_contribution", "must not be negative")
    if params.annual_return_percent < 0:
        raise InvalidParameterError("annual_return_percent", "must not be negative")
    if params.management_fee_percent < 0:
        raise InvalidParameterError("management_fee_percent", "must not be negative")
    if params.annual_contribution_growth_percent <= -100:
        raise InvalidParameterError("annual_contribution_growth_percent", "must be greater than -100")
    if params.compounding_periods_per_year not in cfg.COMPOUNDING_CHOICES:
        raise InvalidParameterError(
            "compounding_periods_per_year",
            f"must be one of {', '.join(str(c) for c in cfg.COMPOUNDING_CHOICES)}",
        )
    if params.contribution_cap is not None and params.contribution_cap < 0:
        raise InvalidParameterError("contribution_cap", "must not be negative")
    if params.inflation_percent <= -100:
        raise InvalidParameterError("inflation_percent", "must be greater than -100")


def project_growth(params: RetirementAccountParameters) -> List[YearlyProjectionEntry]:
    validate_retirement(params)

    periods = params.compounding_periods_per_year
    period_rate = effective_rate_percent(params) / 100 / periods

    balance = float(params.current_balance)
    total_contrib = 0.0
    yearly_contribution = float(params.annual_contribution)

    rows: List[YearlyProjectionEntry] = []
    for year in range(params.years + 1):
        age = params.current_age + year
        contribution = capped_contribution(params, yearly_contribution, age, year)

        for _ in range(periods):
            balance = balance * (1 + period_rate) + contribution / periods

        if not math.isfinite(balance):
            raise InvalidParameterError("annual_return_percent", "grows the balance beyond a representable amount")

        total_contrib += contribution
        rows.append(
            YearlyProjectionEntry(
                year=year,
                age=age,
                contribution=contribution,
                cumulative_contributions=total_contrib,
                balance=balance,
                cumulative_growth=balance - total_contrib - params.current_balance,
            )
        )

        yearly_contribution *= 1 + params.annual_contribution_growth_percent / 100

    logger.debug("Projected %d years to age %d", len(rows), params.target_age)
    return rows


compute_retirement_projection = project_growth
