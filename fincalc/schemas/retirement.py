"""Data contracts for the Roth IRA endpoint."""

from typing import List

from fincalc.models import RetirementSummary, ValueModel, YearlyProjectionEntry


class RetirementProjectionResponse(ValueModel):
    """Year-by-year projection and its headline numbers."""

    projection: List[YearlyProjectionEntry]
    summary: RetirementSummary
