from __future__ import annotations

import datetime as dt
from math import isclose

import pytest

from fincalc.core.amortization import (
    monthly_payment,
    period_payment,
    project_baseline,
    project_schedule,
)
from fincalc.domain.errors import InvalidParameterError, NonConvergenceError
from fincalc.models import (
    ExtraPaymentPolicy,
    InterestAccrual,
    LoanParameters,
    PaymentFrequency,
)


def make_loan(**overrides) -> LoanParameters:
    values = dict(
        principal=300_000.0,
        annual_rate_percent=6.0,
        term_years=30,
        start_date=dt.date(2025, 1, 1),
        payment_frequency=PaymentFrequency.MONTHLY,
    )
    values.update(overrides)
    return LoanParameters(**values)


def test_monthly_payment_matches_standard_formula():
    assert isclose(monthly_payment(300_000.0, 6.0, 30), 1798.65, abs_tol=0.01)


def test_balance_is_non_increasing_and_ends_at_zero():
    schedule = project_schedule(make_loan(), ExtraPaymentPolicy(recurring_extra=200.0))

    balances = [entry.remaining_balance for entry in schedule]
    assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
    assert balances[-1] == 0.0
    assert all(balance > 0 for balance in balances[:-1])

    interest = [entry.cumulative_interest for entry in schedule]
    assert all(later >= earlier for earlier, later in zip(interest, interest[1:]))


def test_principal_and_extra_sum_to_original_principal():
    extra = ExtraPaymentPolicy(
        recurring_extra=150.0,
        one_time_amount=20_000.0,
        one_time_date=dt.date(2027, 3, 10),
        round_up_enabled=True,
        round_up_increment=50.0,
    )
    schedule = project_schedule(make_loan(), extra)

    paid_down = sum(entry.principal_portion + entry.extra_applied for entry in schedule)
    assert paid_down == pytest.approx(300_000.0, abs=1e-6)


def test_extra_200_per_month_scenario():
    loan = make_loan()
    baseline = project_baseline(loan)
    schedule = project_schedule(loan, ExtraPaymentPolicy(recurring_extra=200.0))

    assert len(baseline) == 360
    assert baseline[-1].cumulative_interest == pytest.approx(347_514.57, abs=1.0)

    assert len(schedule) == 279
    assert 255_800 < schedule[-1].cumulative_interest < 256_900


def test_final_period_is_clipped():
    schedule = project_schedule(make_loan(), ExtraPaymentPolicy(recurring_extra=200.0))
    last = schedule[-1]

    assert last.extra_applied == 0.0
    assert last.principal_portion < last.scheduled_payment - last.interest_portion + 200.0


def test_zero_rate_splits_principal_evenly():
    loan = make_loan(principal=12_000.0, annual_rate_percent=0.0, term_years=1)
    schedule = project_schedule(loan)

    assert period_payment(loan) == 1_000.0
    assert len(schedule) == 12
    for entry in schedule:
        assert entry.interest_portion == 0.0
        assert isclose(entry.principal_portion, 1_000.0, abs_tol=1e-9)
    assert schedule[-1].remaining_balance == 0.0
    assert schedule[-1].cumulative_interest == 0.0


def test_identical_inputs_give_identical_schedules():
    loan = make_loan(annual_rate_percent=4.25, term_years=15)
    extra = ExtraPaymentPolicy(recurring_extra=75.0, round_up_enabled=True)

    assert project_schedule(loan, extra) == project_schedule(loan, extra)


def test_monthly_dates_follow_the_calendar():
    schedule = project_schedule(make_loan(start_date=dt.date(2024, 1, 31), term_years=2))

    assert schedule[0].date == dt.date(2024, 1, 31)
    assert schedule[1].date == dt.date(2024, 2, 29)
    assert schedule[2].date == dt.date(2024, 3, 31)
    assert schedule[12].date == dt.date(2025, 1, 31)


def test_one_time_payment_lands_in_its_month():
    extra = ExtraPaymentPolicy(one_time_amount=10_000.0, one_time_date=dt.date(2025, 6, 20))
    schedule = project_schedule(make_loan(), extra)

    with_extra = [entry for entry in schedule if entry.extra_applied > 0]
    assert len(with_extra) == 1
    assert with_extra[0].date == dt.date(2025, 6, 1)
    assert with_extra[0].extra_applied == 10_000.0


def test_one_time_payment_applies_to_every_period_in_its_month():
    loan = make_loan(
        start_date=dt.date(2025, 6, 1),
        payment_frequency=PaymentFrequency.BIWEEKLY,
        interest_accrual=InterestAccrual.PER_PERIOD,
    )
    extra = ExtraPaymentPolicy(one_time_amount=5_000.0, one_time_date=dt.date(2025, 6, 15))
    schedule = project_schedule(loan, extra)

    june = [entry for entry in schedule if entry.date.year == 2025 and entry.date.month == 6]
    assert len(june) == 3
    assert [entry.extra_applied for entry in june] == [5_000.0, 5_000.0, 5_000.0]
    assert all(entry.extra_applied == 0.0 for entry in schedule if entry.date.month != 6 or entry.date.year != 2025)


def test_round_up_tops_payment_to_increment():
    loan = make_loan()
    schedule = project_schedule(loan, ExtraPaymentPolicy(round_up_enabled=True, round_up_increment=100.0))

    payment = period_payment(loan)
    assert schedule[0].extra_applied == pytest.approx(1_800.0 - payment)
    assert len(schedule) < 360


def test_reference_accrual_rejects_biweekly_negative_amortization():
    # half-size payments against a full month of interest never catch up
    loan = make_loan(payment_frequency=PaymentFrequency.BIWEEKLY)

    with pytest.raises(NonConvergenceError):
        project_schedule(loan)


def test_per_period_accrual_pays_off_biweekly_loan():
    loan = make_loan(
        payment_frequency=PaymentFrequency.BIWEEKLY,
        interest_accrual=InterestAccrual.PER_PERIOD,
    )
    schedule = project_schedule(loan)

    assert schedule[1].date - schedule[0].date == dt.timedelta(days=14)
    assert 26 * 29 < len(schedule) <= 26 * 30
    assert schedule[-1].remaining_balance == 0.0


def test_weekly_zero_rate_loan_uses_seven_day_periods():
    loan = make_loan(
        principal=5_200.0,
        annual_rate_percent=0.0,
        term_years=1,
        payment_frequency=PaymentFrequency.WEEKLY,
    )
    schedule = project_schedule(loan)

    assert len(schedule) == 52
    assert schedule[0].scheduled_payment == pytest.approx(100.0)
    assert schedule[-1].date == dt.date(2025, 1, 1) + dt.timedelta(days=7 * 51)


def test_iteration_cap_raises_instead_of_truncating():
    with pytest.raises(NonConvergenceError) as excinfo:
        project_schedule(make_loan(), max_periods=12)
    assert excinfo.value.periods == 12


def test_hyphenated_frequency_is_accepted():
    loan = LoanParameters.model_validate(
        {
            "principal": 1000,
            "annualRatePercent": 5,
            "termYears": 1,
            "startDate": "2025-01-01",
            "paymentFrequency": "bi-weekly",
        }
    )
    assert loan.payment_frequency == PaymentFrequency.BIWEEKLY


def test_payment_formula_overflow_is_an_invalid_rate():
    with pytest.raises(InvalidParameterError) as excinfo:
        monthly_payment(100_000.0, 1_000.0, 100)
    assert excinfo.value.field == "annual_rate_percent"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"principal": 0.0}, "principal"),
        ({"principal": -5.0}, "principal"),
        ({"term_years": 0}, "term_years"),
        ({"term_years": 51}, "term_years"),
        ({"annual_rate_percent": -1.0}, "annual_rate_percent"),
        ({"annual_rate_percent": 1_000.0}, "annual_rate_percent"),
    ],
)
def test_invalid_loan_parameters(overrides, field):
    with pytest.raises(InvalidParameterError) as excinfo:
        project_schedule(make_loan(**overrides))
    assert excinfo.value.field == field


@pytest.mark.parametrize(
    ("extra", "field"),
    [
        (ExtraPaymentPolicy(recurring_extra=-1.0), "recurring_extra"),
        (ExtraPaymentPolicy(one_time_amount=-1.0), "one_time_amount"),
        (ExtraPaymentPolicy(round_up_enabled=True, round_up_increment=0.0), "round_up_increment"),
    ],
)
def test_invalid_extra_policy(extra, field):
    with pytest.raises(InvalidParameterError) as excinfo:
        project_schedule(make_loan(), extra)
    assert excinfo.value.field == field
