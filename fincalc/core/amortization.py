"""
Mortgage payoff schedules.

Order of operations (per period):
  1) Interest accrues on the opening balance at the periodic rate.
  2) The scheduled payment covers that interest; the rest is principal.
  3) Extra payments (recurring, one-time, round-up) come off the balance.
  4) The final period is clipped so the balance lands on exactly zero.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from fincalc import config as cfg
from fincalc.domain.errors import InvalidParameterError, NonConvergenceError
from fincalc.models import (
    ExtraPaymentPolicy,
    InterestAccrual,
    LoanParameters,
    PaymentFrequency,
    PaymentScheduleEntry,
)

logger = logging.getLogger(__name__)


def periods_per_year(frequency: PaymentFrequency) -> int:
    return cfg.PERIODS_PER_YEAR[PaymentFrequency(frequency).value]


def monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Standard fixed monthly payment; ``principal / n`` when the rate is zero."""
    monthly_rate = annual_rate_percent / 100 / cfg.MONTHS_PER_YEAR
    number_of_payments = term_years * cfg.MONTHS_PER_YEAR
    if monthly_rate == 0:
        return principal / number_of_payments
    try:
        growth = (1 + monthly_rate) ** number_of_payments
    except OverflowError:
        raise InvalidParameterError(
            "annual_rate_percent", "too large to amortize over the requested term"
        ) from None
    return principal * monthly_rate * growth / (growth - 1)


def period_payment(loan: LoanParameters) -> float:
    """Monthly payment spread over the loan's payment frequency."""
    multiplier = periods_per_year(loan.payment_frequency) / cfg.MONTHS_PER_YEAR
    return monthly_payment(loan.principal, loan.annual_rate_percent, loan.term_years) / multiplier


def periodic_rate(loan: LoanParameters) -> float:
    annual = loan.annual_rate_percent / 100
    if loan.interest_accrual == InterestAccrual.PER_PERIOD:
        return annual / periods_per_year(loan.payment_frequency)
    return annual / cfg.MONTHS_PER_YEAR


def payment_date(loan: LoanParameters, index: int) -> dt.date:
    """Date of the payment at zero-based ``index``."""
    if loan.payment_frequency == PaymentFrequency.BIWEEKLY:
        return loan.start_date + dt.timedelta(days=14 * index)
    if loan.payment_frequency == PaymentFrequency.WEEKLY:
        return loan.start_date + dt.timedelta(days=7 * index)
    return loan.start_date + relativedelta(months=index)


def round_up_top_up(payment: float, increment: float) -> float:
    rounded = math.ceil(payment / increment) * increment
    return rounded - payment


def validate_loan(loan: LoanParameters) -> None:
    if loan.principal <= 0:
        raise InvalidParameterError("principal", "must be greater than 0")
    if loan.term_years <= 0:
        raise InvalidParameterError("term_years", "must be greater than 0")
    if loan.term_years > cfg.MAX_TERM_YEARS:
        raise InvalidParameterError("term_years", f"must be at most {cfg.MAX_TERM_YEARS}")
    if loan.annual_rate_percent < 0:
        raise InvalidParameterError("annual_rate_percent", "must not be negative")
    if loan.annual_rate_percent > cfg.MAX_RATE_PERCENT:
        raise InvalidParameterError("annual_rate_percent", f"must be at most {cfg.MAX_RATE_PERCENT:g}")


def validate_extra(extra: ExtraPaymentPolicy) -> None:
    if extra.recurring_extra < 0:
        raise InvalidParameterError("recurring_extra", "must not be negative")
    if extra.one_time_amount < 0:
        raise InvalidParameterError("one_time_amount", "must not be negative")
    if extra.round_up_enabled and extra.round_up_increment <= 0:
        raise InvalidParameterError("round_up_increment", "must be greater than 0")


def project_schedule(
    loan: LoanParameters,
    extra: Optional[ExtraPaymentPolicy] = None,
    max_periods: int = cfg.MAX_SCHEDULE_PERIODS,
) -> List[PaymentScheduleEntry]:
    """Build the payment-by-payment schedule until the balance reaches zero.

    Raises ``InvalidParameterError`` for rejected inputs and
    ``NonConvergenceError`` when the balance cannot be paid down.
    """
    extra = extra or ExtraPaymentPolicy()
    validate_loan(loan)
    validate_extra(extra)

    payment = period_payment(loan)
    rate = periodic_rate(loan)
    top_up = round_up_top_up(payment, extra.round_up_increment) if extra.round_up_enabled else 0.0

    balance = float(loan.principal)
    total_interest = 0.0

    rows: List[PaymentScheduleEntry] = []
    for index in range(max_periods):
        when = payment_date(loan, index)

        interest = balance * rate
        principal = payment - interest
        extra_paid = extra.recurring_extra + top_up

        if (
            extra.one_time_date is not None
            and when.year == extra.one_time_date.year
            and when.month == extra.one_time_date.month
        ):
            extra_paid += extra.one_time_amount

        if principal + extra_paid <= 0:
            logger.warning(
                "Payment %.2f does not cover interest %.2f at period %d",
                payment,
                interest,
                index + 1,
            )
            raise NonConvergenceError(
                f"payment of {payment:.2f} does not cover accruing interest of {interest:.2f}",
                periods=index,
            )

        # never overpay on the last period
        if balance < principal + extra_paid:
            principal = balance
            extra_paid = 0.0

        balance = balance - principal - extra_paid
        if balance < cfg.BALANCE_EPSILON:
            principal += balance
            balance = 0.0
        total_interest += interest

        rows.append(
            PaymentScheduleEntry(
                period=index + 1,
                date=when,
                scheduled_payment=payment,
                principal_portion=principal,
                interest_portion=interest,
                extra_applied=extra_paid,
                remaining_balance=balance,
                cumulative_interest=total_interest,
            )
        )

        if balance == 0.0:
            logger.debug("Schedule paid off after %d periods", len(rows))
            return rows

    logger.warning("Schedule still open after %d periods", max_periods)
    raise NonConvergenceError(
        f"balance not repaid within {max_periods} periods",
        periods=max_periods,
    )


def project_baseline(
    loan: LoanParameters,
    max_periods: int = cfg.MAX_SCHEDULE_PERIODS,
) -> List[PaymentScheduleEntry]:
    """Schedule without extra payments, for savings comparisons."""
    return project_schedule(loan, ExtraPaymentPolicy(), max_periods=max_periods)


compute_amortization_schedule = project_schedule
compute_baseline_schedule = project_baseline
