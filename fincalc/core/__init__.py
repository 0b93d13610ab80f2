"""Pure calculation functions behind the calculators.

* ``amortization`` – mortgage payoff schedules, with and without extra payments.
* ``retirement`` – year-by-year Roth IRA compound growth.
* ``summary`` – headline metrics derived from finished sequences.
* ``dti`` – front-end and back-end debt-to-income ratios.
"""

from fincalc.core.amortization import (
    compute_amortization_schedule,
    compute_baseline_schedule,
    project_baseline,
    project_schedule,
)
from fincalc.core.dti import calculate_dti
from fincalc.core.retirement import compute_retirement_projection, project_growth
from fincalc.core.summary import summarize, summarize_projection, summarize_schedule

__all__ = [
    "project_schedule",
    "project_baseline",
    "project_growth",
    "compute_amortization_schedule",
    "compute_baseline_schedule",
    "compute_retirement_projection",
    "summarize",
    "summarize_schedule",
    "summarize_projection",
    "calculate_dti",
]
