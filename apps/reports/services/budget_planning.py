"""
Category budget planner.

Suggests how a project's total budget could be spread across its
categories using a table of fractions, and compares each suggestion
with what has actually been spent in that category.
"""

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from django.conf import settings

from apps.projects.models import Project

CENT = Decimal('0.01')


class BudgetFractionTable:
    """Share of total budget per category, with a fallback for the rest."""

    def __init__(self, fractions: Optional[Dict[str, Decimal]] = None, default: Decimal = Decimal('0.05')):
        self.fractions = dict(fractions or {})
        self.default = default

    @classmethod
    def from_settings(cls) -> 'BudgetFractionTable':
        return cls(
            fractions={
                category: Decimal(str(fraction))
                for category, fraction in settings.CATEGORY_BUDGET_FRACTIONS.items()
            },
            default=Decimal(str(settings.CATEGORY_BUDGET_DEFAULT_FRACTION)),
        )

    def fraction_for(self, category: str) -> Decimal:
        return self.fractions.get(category, self.default)


def category_budget_plan(project: Project, table: Optional[BudgetFractionTable] = None) -> List[dict]:
    """
    Build the planned budget per category for a project.

    Args:
        project: The project to plan for.
        table: Fraction table to apply. Defaults to the one configured
            in settings.

    Returns:
        list[dict]: One row per project category, in the project's
        category order, each containing:
            - category (str)
            - fraction (Decimal)
            - budget_amount (Decimal): total_budget * fraction
            - spent_amount (Decimal): Sum of purchase totals in the category
            - remaining (Decimal): budget_amount - spent_amount, negative
              when the category is over its planned budget

    Example:
        With total_budget 100000.00, Kitchen plans 15000.00 and an
        unlisted category such as Landscaping plans 5000.00.
    """
    if table is None:
        table = BudgetFractionTable.from_settings()

    spent = defaultdict(Decimal)
    for category, total_cost in project.purchases.values_list('category', 'total_cost'):
        spent[category] += total_cost

    rows = []
    for category in project.categories:
        fraction = table.fraction_for(category)
        budget_amount = (project.total_budget * fraction).quantize(CENT, rounding=ROUND_HALF_UP)
        spent_amount = spent.get(category, Decimal('0')).quantize(CENT, rounding=ROUND_HALF_UP)
        rows.append({
            'category': category,
            'fraction': fraction,
            'budget_amount': budget_amount,
            'spent_amount': spent_amount,
            'remaining': budget_amount - spent_amount,
        })

    return rows
