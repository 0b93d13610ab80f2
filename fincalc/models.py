from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fincalc.config import DEFAULT_ROUND_UP_INCREMENT


class ValueModel(BaseModel):
    """Immutable record; snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# -----------------------------
# Mortgage payoff
# -----------------------------


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"


class InterestAccrual(str, Enum):
    # interest charged at rate/12 every period, whatever the period length
    MONTHLY_RATE = "monthly_rate"
    # interest charged at rate/periods_per_year
    PER_PERIOD = "per_period"


class LoanParameters(ValueModel):
    principal: float
    annual_rate_percent: float
    term_years: int
    start_date: dt.date
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    interest_accrual: InterestAccrual = InterestAccrual.MONTHLY_RATE

    @field_validator("payment_frequency", mode="before")
    @classmethod
    def _accept_hyphenated(cls, value):
        # the calculator UI sends "bi-weekly"
        if isinstance(value, str):
            return value.replace("-", "").lower()
        return value


class ExtraPaymentPolicy(ValueModel):
    recurring_extra: float = 0.0
    one_time_amount: float = 0.0
    one_time_date: Optional[dt.date] = None
    round_up_enabled: bool = False
    round_up_increment: float = DEFAULT_ROUND_UP_INCREMENT


class PaymentScheduleEntry(ValueModel):
    period: int
    date: dt.date
    scheduled_payment: float
    principal_portion: float
    interest_portion: float
    extra_applied: float
    remaining_balance: float
    cumulative_interest: float


class MortgageSummary(ValueModel):
    principal: float
    scheduled_payment: float
    number_of_payments: int
    payoff_date: Optional[dt.date]
    total_interest_paid: float
    total_extra_paid: float
    total_paid: float

    baseline_total_interest: Optional[float] = None
    baseline_number_of_payments: Optional[int] = None
    baseline_payoff_date: Optional[dt.date] = None
    interest_saved: Optional[float] = None
    periods_saved: Optional[int] = None
    time_saved_years: Optional[float] = None


# -----------------------------
# Roth IRA
# -----------------------------

COMPOUNDING_NAMES = {
    "annually": 1,
    "semiannually": 2,
    "quarterly": 4,
    "monthly": 12,
}


class RetirementAccountParameters(ValueModel):
    current_age: int
    target_age: int
    current_balance: float = 0.0
    annual_contribution: float = 0.0
    annual_contribution_growth_percent: float = 0.0
    catch_up_enabled: bool = False
    annual_return_percent: float = 7.0
    management_fee_percent: float = 0.0
    compounding_periods_per_year: int = 1
    inflation_percent: float = 0.0

    start_year: Optional[int] = None
    contribution_cap: Optional[float] = None

    @field_validator("compounding_periods_per_year", mode="before")
    @classmethod
    def _accept_frequency_name(cls, value):
        if isinstance(value, str) and value.lower() in COMPOUNDING_NAMES:
            return COMPOUNDING_NAMES[value.lower()]
        return value

    @property
    def years(self) -> int:
        return self.target_age - self.current_age


class YearlyProjectionEntry(ValueModel):
    year: int
    age: int
    contribution: float
    cumulative_contributions: float
    balance: float
    cumulative_growth: float


class RetirementSummary(ValueModel):
    years: int
    initial_balance: float
    final_balance: float
    total_contributions: float
    investment_growth: float
    inflation_adjusted_balance: float
    effective_rate_percent: float


# -----------------------------
# Debt-to-income
# -----------------------------


class IncomeItem(ValueModel):
    source: str = "Primary Income"
    amount: float = Field(ge=0)


class DebtItem(ValueModel):
    category: str
    amount: float = Field(ge=0)
    is_housing: bool = False


class DebtToIncomeInputs(ValueModel):
    incomes: List[IncomeItem] = Field(default_factory=list)
    debts: List[DebtItem] = Field(default_factory=list)


class DebtToIncomeResult(ValueModel):
    total_income: float
    total_debt: float
    housing_debt: float
    front_end_ratio: float
    back_end_ratio: float
    disposable_income: float
    flags: List[str] = Field(default_factory=list)
