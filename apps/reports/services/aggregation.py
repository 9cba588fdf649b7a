"""
Aggregation Module
==================

Rollups over a project's purchase records. These power the unit cost
report, the category spending report, the dashboard summary, partner
balances and budget alerts.

Functions:
    unit_costs: Actual cost and budget usage per unit.
    category_spending: Spending per category, largest first.
    project_summary: Project-wide totals and counts.
    partner_balances: Contribution against spending per partner.
    budget_alerts: Warnings derived from the rollups above.
    monthly_trends: Spending and purchase count per calendar month.
    months_ago: Cutoff date for a "last N months" time range.

Example:
    Building the unit cost report::

        from apps.reports.services import unit_costs

        for row in unit_costs(project.id):
            print(f"{row['unit_name']}: {row['actual_cost']} ({row['cost_percentage']}%)")

Note:
    All functions are read-only and return plain dictionaries with
    Decimal amounts quantized to cents. Sums are taken in Python over
    the stored Decimal values, so results do not depend on how the
    database adds up decimals.
"""

import calendar
from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone

from apps.projects.models import Project, Partner, Unit, UnitStatus
from apps.reports.presentation import format_currency, format_percentage
from apps.purchases.models import Purchase

from .exceptions import ReportProjectNotFoundError

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

PROJECT_BUDGET_ALERT_PERCENT = Decimal('90')
CATEGORY_CONCENTRATION_SHARE = Decimal('0.4')


def _money(value):
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(part, whole):
    """
    Return part / whole * 100 rounded to 2 decimals.

    A non-positive whole yields 0.00 instead of an error.
    """
    if whole <= 0:
        return ZERO
    return (Decimal(part) / Decimal(whole) * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def months_ago(months, today=None):
    """
    Return the date N calendar months before today.

    The day is clamped to the end of the target month, so 31 March minus
    one month is 28 (or 29) February.
    """
    today = today or timezone.localdate()
    year, month_index = divmod(today.year * 12 + today.month - 1 - months, 12)
    month = month_index + 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _purchases(project_id, since=None):
    purchases = Purchase.objects.filter(project_id=project_id)
    if since is not None:
        purchases = purchases.filter(date__gte=since)
    return purchases


def _get_project(project_id):
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ReportProjectNotFoundError("Project not found")


def unit_costs(project_id):
    """
    Calculate actual cost and budget usage for every unit of a project.

    Args:
        project_id (UUID): The project's unique identifier.

    Returns:
        list[dict]: One row per unit, ordered by unit name (case-sensitive),
        each containing:
            - unit_id (UUID)
            - unit_name (str)
            - unit_type (str)
            - budget (Decimal)
            - actual_cost (Decimal): Sum of the unit's purchase totals.
            - cost_percentage (Decimal): actual / budget * 100, or 0.00
              when the budget is 0.

    Example:
        A unit with budget 1000.00 and purchases totalling 750.00
        yields ``cost_percentage == Decimal('75.00')``.
    """
    spent = defaultdict(Decimal)
    purchases = Purchase.objects.filter(
        project_id=project_id,
        unit__isnull=False
    ).values_list('unit_id', 'total_cost')

    for unit_id, total_cost in purchases:
        spent[unit_id] += total_cost

    rows = []
    for unit in Unit.objects.filter(project_id=project_id):
        actual_cost = _money(spent.get(unit.id, ZERO))
        rows.append({
            'unit_id': unit.id,
            'unit_name': unit.name,
            'unit_type': unit.type,
            'budget': _money(unit.budget),
            'actual_cost': actual_cost,
            'cost_percentage': percentage(actual_cost, unit.budget),
        })

    # Code-point order regardless of database collation
    rows.sort(key=lambda row: row['unit_name'])
    return rows


def category_spending(project_id, since=None):
    """
    Calculate spending per category for a project.

    Only categories that occur on at least one purchase are listed.

    Args:
        project_id (UUID): The project's unique identifier.
        since (date, optional): Only count purchases dated on or after this.

    Returns:
        list[dict]: Rows ordered by total_spent descending; ties keep the
        order in which categories were first recorded. Each row contains:
            - category (str)
            - total_spent (Decimal)
            - purchase_count (int)
            - average_purchase (Decimal): total_spent / purchase_count.
    """
    totals = {}
    purchases = _purchases(project_id, since).order_by(
        'created_at', 'id'
    ).values_list('category', 'total_cost')

    for category, total_cost in purchases:
        entry = totals.setdefault(category, {'total': ZERO, 'count': 0})
        entry['total'] += total_cost
        entry['count'] += 1

    rows = [
        {
            'category': category,
            'total_spent': _money(entry['total']),
            'purchase_count': entry['count'],
            'average_purchase': _money(entry['total'] / entry['count']),
        }
        for category, entry in totals.items()
    ]

    # Stable sort keeps first-encountered order for equal totals
    rows.sort(key=lambda row: row['total_spent'], reverse=True)
    return rows


def project_summary(project_id, since=None):
    """
    Calculate dashboard totals for a project.

    With ``since`` the spending totals and the purchase count only cover
    purchases dated on or after that day. Partner and unit counts always
    cover the whole project.

    Returns:
        dict: A dictionary containing:
            - total_budget, total_spent, remaining_budget (Decimal)
            - spent_percentage (Decimal): 0.00 when the budget is 0
            - general_spent (Decimal): Spending not charged to a unit
            - partner_count, unit_count, purchase_count (int)
            - active_units (int): Units in progress
            - completed_units (int)

    Raises:
        ReportProjectNotFoundError: If the project does not exist
    """
    project = _get_project(project_id)

    total_spent = ZERO
    general_spent = ZERO
    purchase_count = 0
    for unit_id, total_cost in _purchases(project.id, since).values_list('unit_id', 'total_cost'):
        total_spent += total_cost
        purchase_count += 1
        if unit_id is None:
            general_spent += total_cost

    unit_statuses = list(project.units.values_list('status', flat=True))

    return {
        'total_budget': _money(project.total_budget),
        'total_spent': _money(total_spent),
        'remaining_budget': _money(project.total_budget - total_spent),
        'spent_percentage': percentage(total_spent, project.total_budget),
        'general_spent': _money(general_spent),
        'partner_count': project.partners.count(),
        'unit_count': len(unit_statuses),
        'purchase_count': purchase_count,
        'active_units': unit_statuses.count(UnitStatus.IN_PROGRESS),
        'completed_units': unit_statuses.count(UnitStatus.COMPLETED),
    }


def partner_balances(project_id):
    """
    Compare each partner's contribution with the purchases they paid for.

    Returns:
        list[dict]: Rows ordered by partner name, each containing:
            - partner_id (UUID)
            - partner_name (str)
            - status (str)
            - total_contribution (Decimal)
            - total_spent (Decimal): Sum of purchases referencing the partner.
            - balance (Decimal): contribution - spent (may be negative).
    """
    spent = defaultdict(Decimal)
    purchases = Purchase.objects.filter(
        project_id=project_id,
        partner__isnull=False
    ).values_list('partner_id', 'total_cost')

    for partner_id, total_cost in purchases:
        spent[partner_id] += total_cost

    rows = []
    for partner in Partner.objects.filter(project_id=project_id):
        total_spent = _money(spent.get(partner.id, ZERO))
        rows.append({
            'partner_id': partner.id,
            'partner_name': partner.name,
            'status': partner.status,
            'total_contribution': _money(partner.total_contribution),
            'total_spent': total_spent,
            'balance': _money(partner.total_contribution - total_spent),
        })

    rows.sort(key=lambda row: row['partner_name'])
    return rows


def budget_alerts(project_id, since=None):
    """
    Derive budget warnings for a project.

    Alerts raised:
        - More than 90% of the project budget used (warning)
        - Top category above 40% of all spending (info)
        - Units whose cost exceeds their budget (warning, with overage)

    ``since`` narrows the budget and category checks to recent purchases.
    Unit overage is always judged on the unit's full cost.

    Returns:
        list[dict]: Alerts with type, code, title, description and action.

    Raises:
        ReportProjectNotFoundError: If the project does not exist
    """
    summary = project_summary(project_id, since=since)
    alerts = []

    budget_used = summary['spent_percentage']
    if budget_used > PROJECT_BUDGET_ALERT_PERCENT:
        alerts.append({
            'type': 'warning',
            'code': 'budget_used',
            'title': 'Budget Alert',
            'description': (
                f"You've used {format_percentage(budget_used)} of your total budget. "
                "Consider reviewing upcoming expenses."
            ),
            'action': 'Review Budget',
        })

    categories = category_spending(project_id, since=since)
    total_spent = summary['total_spent']
    if categories and total_spent > 0:
        top = categories[0]
        if top['total_spent'] > total_spent * CATEGORY_CONCENTRATION_SHARE:
            alerts.append({
                'type': 'info',
                'code': 'category_concentration',
                'title': 'Category Concentration',
                'description': (
                    f"{top['category']} accounts for "
                    f"{format_percentage(percentage(top['total_spent'], total_spent))} of spending."
                ),
                'action': 'Analyze Category',
            })

    over_budget = [row for row in unit_costs(project_id) if row['cost_percentage'] > 100]
    if over_budget:
        overage = sum((row['actual_cost'] - row['budget'] for row in over_budget), ZERO)
        alerts.append({
            'type': 'warning',
            'code': 'units_over_budget',
            'title': 'Units Over Budget',
            'description': (
                f"{len(over_budget)} unit(s) are over budget. "
                f"Total overage: {format_currency(overage)}."
            ),
            'action': 'Review Units',
        })

    return alerts


def monthly_trends(project_id, since=None):
    """
    Calculate spending per calendar month.

    Args:
        project_id (UUID): The project's unique identifier.
        since (date, optional): Only count purchases dated on or after this.

    Returns:
        list[dict]: Rows in chronological order, only for months with at
        least one purchase, each containing:
            - month (str): Period key, e.g. '2024-03'
            - label (str): Display label, e.g. 'Mar 2024'
            - total_spent (Decimal)
            - purchase_count (int)

    Example:
        Purchases of 100.00 and 50.00 in March 2024 give::

            {'month': '2024-03', 'label': 'Mar 2024',
             'total_spent': Decimal('150.00'), 'purchase_count': 2}
    """
    months = {}
    for purchase_date, total_cost in _purchases(project_id, since).values_list('date', 'total_cost'):
        month_key = purchase_date.strftime('%Y-%m')
        entry = months.setdefault(month_key, {
            'label': purchase_date.strftime('%b %Y'),
            'total': ZERO,
            'count': 0,
        })
        entry['total'] += total_cost
        entry['count'] += 1

    return [
        {
            'month': month_key,
            'label': entry['label'],
            'total_spent': _money(entry['total']),
            'purchase_count': entry['count'],
        }
        for month_key, entry in sorted(months.items())
    ]
