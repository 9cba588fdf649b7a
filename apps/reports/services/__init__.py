"""
Reports app services layer.

Every report is recomputed from the current purchase records on each
call. Nothing here writes to the database.
"""

from .exceptions import (
    ReportsServiceError,
    ReportProjectNotFoundError,
)

from .aggregation import (
    percentage,
    unit_costs,
    category_spending,
    project_summary,
    partner_balances,
    budget_alerts,
    monthly_trends,
    months_ago,
)

from .budget_planning import (
    BudgetFractionTable,
    category_budget_plan,
)


__all__ = [
    # Exceptions
    'ReportsServiceError',
    'ReportProjectNotFoundError',

    # Aggregation
    'percentage',
    'unit_costs',
    'category_spending',
    'project_summary',
    'partner_balances',
    'budget_alerts',
    'monthly_trends',
    'months_ago',

    # Budget Planning
    'BudgetFractionTable',
    'category_budget_plan',
]
