"""Debt-to-income ratios."""

from __future__ import annotations

from typing import List

from fincalc import config as cfg
from fincalc.domain.errors import InvalidParameterError
from fincalc.models import DebtToIncomeInputs, DebtToIncomeResult


def calculate_dti(inputs: DebtToIncomeInputs) -> DebtToIncomeResult:
    """Front-end (housing only) and back-end (all debts) ratios, in percent."""
    total_income = sum(item.amount for item in inputs.incomes)
    if total_income <= 0:
        raise InvalidParameterError("incomes", "total monthly income must be greater than 0")

    total_debt = sum(item.amount for item in inputs.debts)
    housing_debt = sum(item.amount for item in inputs.debts if item.is_housing)

    front_end = housing_debt / total_income * 100
    back_end = total_debt / total_income * 100
    disposable = total_income - total_debt

    flags: List[str] = []
    if back_end > cfg.DTI_BACK_END_LIMIT:
        flags.append("high_dti")
    if front_end > cfg.DTI_FRONT_END_LIMIT:
        flags.append("high_housing_ratio")
    if disposable < total_income * cfg.DISPOSABLE_INCOME_FLOOR:
        flags.append("low_disposable_income")

    return DebtToIncomeResult(
        total_income=total_income,
        total_debt=total_debt,
        housing_debt=housing_debt,
        front_end_ratio=front_end,
        back_end_ratio=back_end,
        disposable_income=disposable,
        flags=flags,
    )
