"""
Display helpers for report rows.

Status tiers for a unit's cost percentage:
    <= 70        on_track     "On Track"
    > 70, <= 90  warning      "Warning"
    > 90         over_budget  "Over Budget"

Thresholds come from settings.BUDGET_STATUS_ON_TRACK_MAX and
settings.BUDGET_STATUS_WARNING_MAX.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

ON_TRACK = 'on_track'
WARNING = 'warning'
OVER_BUDGET = 'over_budget'

STATUS_LABELS = {
    ON_TRACK: 'On Track',
    WARNING: 'Warning',
    OVER_BUDGET: 'Over Budget',
}


def budget_status(cost_percentage):
    """Return the status tier for a cost percentage."""
    value = Decimal(str(cost_percentage))
    if value <= Decimal(str(settings.BUDGET_STATUS_ON_TRACK_MAX)):
        return ON_TRACK
    if value <= Decimal(str(settings.BUDGET_STATUS_WARNING_MAX)):
        return WARNING
    return OVER_BUDGET


def budget_status_label(cost_percentage):
    return STATUS_LABELS[budget_status(cost_percentage)]


def format_currency(amount, currency=None):
    """
    Format an amount with thousands separators and two decimals.

    >>> format_currency(Decimal('1234.5'), 'EGP')
    '1,234.50 EGP'
    """
    if currency is None:
        currency = settings.CURRENCY_CODE
    value = Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f"{value:,.2f} {currency}"


def format_percentage(value):
    """Format a percentage with one decimal place (75.25 -> '75.3%')."""
    rounded = Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def unit_cost_display(row):
    """Display fields for a unit cost row."""
    status = budget_status(row['cost_percentage'])
    return {
        'budget': format_currency(row['budget']),
        'actual_cost': format_currency(row['actual_cost']),
        'cost_percentage': format_percentage(row['cost_percentage']),
        'status': status,
        'status_label': STATUS_LABELS[status],
    }


def category_spending_display(row):
    """Display fields for a category spending row."""
    return {
        'total_spent': format_currency(row['total_spent']),
        'average_purchase': format_currency(row['average_purchase']),
    }


def budget_plan_display(row):
    """Display fields for a category budget plan row."""
    return {
        'fraction': format_percentage(row['fraction'] * 100),
        'budget_amount': format_currency(row['budget_amount']),
        'spent_amount': format_currency(row['spent_amount']),
        'remaining': format_currency(row['remaining']),
    }
