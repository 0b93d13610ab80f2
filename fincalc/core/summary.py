"""Headline numbers derived from finished schedules and projections."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from fincalc import config as cfg
from fincalc.core.amortization import periods_per_year
from fincalc.core.retirement import effective_rate_percent, inflation_adjusted
from fincalc.domain.errors import ProjectionError
from fincalc.models import (
    LoanParameters,
    MortgageSummary,
    PaymentScheduleEntry,
    RetirementAccountParameters,
    RetirementSummary,
    YearlyProjectionEntry,
)

logger = logging.getLogger(__name__)


def total_interest_paid(schedule: Sequence[PaymentScheduleEntry]) -> float:
    return schedule[-1].cumulative_interest if schedule else 0.0


def total_extra_paid(schedule: Sequence[PaymentScheduleEntry]) -> float:
    return sum(entry.extra_applied for entry in schedule)


def interest_saved(
    baseline: Sequence[PaymentScheduleEntry],
    with_extra: Sequence[PaymentScheduleEntry],
) -> float:
    saved = total_interest_paid(baseline) - total_interest_paid(with_extra)
    if saved < -cfg.BALANCE_EPSILON:
        # extra payments can only shorten the loan
        raise ProjectionError([f"extra payments increased total interest by {-saved:.2f}"])
    return max(saved, 0.0)


def periods_saved(
    baseline: Sequence[PaymentScheduleEntry],
    with_extra: Sequence[PaymentScheduleEntry],
) -> int:
    return len(baseline) - len(with_extra)


def schedule_periods_per_year(schedule: Sequence[PaymentScheduleEntry]) -> int:
    """Payments per year, read off the spacing of the first two dates."""
    if len(schedule) < 2:
        return cfg.MONTHS_PER_YEAR
    gap = (schedule[1].date - schedule[0].date).days
    if gap == 7:
        return cfg.PERIODS_PER_YEAR["weekly"]
    if gap == 14:
        return cfg.PERIODS_PER_YEAR["biweekly"]
    return cfg.MONTHS_PER_YEAR


def schedule_principal(schedule: Sequence[PaymentScheduleEntry]) -> float:
    """Opening balance of the schedule's first period."""
    if not schedule:
        return 0.0
    first = schedule[0]
    return first.remaining_balance + first.principal_portion + first.extra_applied


def time_saved_years(
    baseline: Sequence[PaymentScheduleEntry],
    with_extra: Sequence[PaymentScheduleEntry],
    loan: Optional[LoanParameters] = None,
) -> float:
    if loan is not None:
        per_year = periods_per_year(loan.payment_frequency)
    else:
        per_year = schedule_periods_per_year(baseline)
    return periods_saved(baseline, with_extra) / per_year


def summarize_schedule(
    schedule: Sequence[PaymentScheduleEntry],
    loan: Optional[LoanParameters] = None,
    baseline: Optional[Sequence[PaymentScheduleEntry]] = None,
) -> MortgageSummary:
    """Totals for ``schedule``, compared with ``baseline`` when given.

    Without ``loan`` the principal and payment frequency are read from the
    schedule entries themselves.
    """
    total_interest = total_interest_paid(schedule)
    extra_total = total_extra_paid(schedule)
    summary = dict(
        principal=loan.principal if loan is not None else schedule_principal(schedule),
        scheduled_payment=schedule[0].scheduled_payment if schedule else 0.0,
        number_of_payments=len(schedule),
        payoff_date=schedule[-1].date if schedule else None,
        total_interest_paid=total_interest,
        total_extra_paid=extra_total,
        total_paid=sum(e.principal_portion + e.interest_portion + e.extra_applied for e in schedule),
    )

    if baseline is not None:
        summary.update(
            baseline_total_interest=total_interest_paid(baseline),
            baseline_number_of_payments=len(baseline),
            baseline_payoff_date=baseline[-1].date if baseline else None,
            interest_saved=interest_saved(baseline, schedule),
            periods_saved=periods_saved(baseline, schedule),
            time_saved_years=time_saved_years(baseline, schedule, loan),
        )

    return MortgageSummary(**summary)


def summarize_projection(
    projection: Sequence[YearlyProjectionEntry],
    params: RetirementAccountParameters,
) -> RetirementSummary:
    final_balance = projection[-1].balance if projection else params.current_balance
    contributions = projection[-1].cumulative_contributions if projection else 0.0
    return RetirementSummary(
        years=params.years,
        initial_balance=params.current_balance,
        final_balance=final_balance,
        total_contributions=contributions,
        investment_growth=final_balance - contributions - params.current_balance,
        inflation_adjusted_balance=inflation_adjusted(
            final_balance, params.inflation_percent, params.years
        ),
        effective_rate_percent=effective_rate_percent(params),
    )


def summarize(
    result: Union[Sequence[PaymentScheduleEntry], Sequence[YearlyProjectionEntry]],
    baseline: Optional[Sequence[PaymentScheduleEntry]] = None,
    *,
    loan: Optional[LoanParameters] = None,
    params: Optional[RetirementAccountParameters] = None,
) -> Union[MortgageSummary, RetirementSummary]:
    """Summarize either a payment schedule or a yearly projection.

    A schedule (and optionally its baseline) summarizes on its own; ``loan``
    overrides the principal and frequency otherwise read from the entries.
    A projection needs its ``params`` for inflation and fees.
    """
    if params is not None:
        return summarize_projection(result, params)  # type: ignore[arg-type]
    if result and isinstance(result[0], YearlyProjectionEntry):
        raise TypeError("summarize() needs params= to summarize a yearly projection")
    if baseline is not None:
        logger.debug("Comparing %d periods against a %d period baseline", len(result), len(baseline))
    return summarize_schedule(result, loan, baseline)  # type: ignore[arg-type]
