"""Data contracts for the mortgage payoff endpoint."""

from typing import List

from pydantic import Field

from fincalc.models import (
    ExtraPaymentPolicy,
    LoanParameters,
    MortgageSummary,
    PaymentScheduleEntry,
    ValueModel,
)


class MortgagePayoffRequest(ValueModel):
    """Loan terms plus the extra-payment policy to compare against the baseline."""

    loan: LoanParameters
    extra_payments: ExtraPaymentPolicy = Field(
        default_factory=ExtraPaymentPolicy,
        description="Omit to project the scheduled payments only.",
    )


class MortgagePayoffResponse(ValueModel):
    """Schedule with extra payments, the plain baseline, and the comparison."""

    schedule: List[PaymentScheduleEntry]
    baseline: List[PaymentScheduleEntry]
    summary: MortgageSummary
