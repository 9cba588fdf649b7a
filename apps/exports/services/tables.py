"""
Tabular view of a project for exports.

Both the workbook download and the Google Sheets sync are built from the
same tables, so the two never disagree.
"""

from django.utils import timezone

from apps.reports.services import (
    unit_costs,
    category_spending,
    category_budget_plan,
    project_summary,
)


TABLE_ORDER = ('Projects', 'Partners', 'Units', 'Purchases', 'Summary')

CATEGORY_SPENDING_HEADING = 'CATEGORY SPENDING'
BUDGET_PLAN_HEADING = 'CATEGORY BUDGET PLAN'


class ExportTable:
    """A titled sheet of rows under a single header row."""

    def __init__(self, title, headers, rows=None):
        self.title = title
        self.headers = list(headers)
        self.rows = list(rows or [])

    def __repr__(self):
        return f"<ExportTable {self.title}: {len(self.rows)} rows>"

    def values(self):
        """Header row followed by data rows."""
        return [self.headers] + self.rows


def _local_date(value):
    return timezone.localtime(value).date() if value else ''


def _projects_table(project):
    return ExportTable('Projects', [
        'Project ID', 'Project Name', 'Description', 'Location',
        'Total Budget', 'Categories', 'Created Date', 'Last Updated',
    ], [[
        str(project.id),
        project.name,
        project.description,
        project.location,
        project.total_budget,
        ', '.join(project.categories),
        _local_date(project.created_at),
        _local_date(project.updated_at),
    ]])


def _partners_table(project):
    rows = []
    for partner in project.partners.order_by('name'):
        rows.append([
            str(partner.id),
            partner.name,
            partner.email,
            partner.phone,
            partner.total_contribution,
            partner.status,
            _local_date(partner.created_at),
            _local_date(partner.updated_at),
        ])
    return ExportTable('Partners', [
        'Partner ID', 'Partner Name', 'Email', 'Phone',
        'Total Contribution', 'Status', 'Created Date', 'Last Updated',
    ], rows)


def _units_table(project):
    units = {unit.id: unit for unit in project.units.select_related('partner')}
    rows = []
    for cost in unit_costs(project.id):
        unit = units[cost['unit_id']]
        rows.append([
            str(unit.id),
            unit.name,
            unit.type,
            cost['budget'],
            cost['actual_cost'],
            cost['cost_percentage'],
            cost['budget'] - cost['actual_cost'],
            unit.status,
            unit.partner.name if unit.partner else '',
            unit.completion_date or '',
            _local_date(unit.created_at),
            _local_date(unit.updated_at),
        ])
    return ExportTable('Units', [
        'Unit ID', 'Unit Name', 'Type', 'Budget', 'Actual Cost',
        'Cost Percentage', 'Remaining Budget', 'Status', 'Partner',
        'Completion Date', 'Created Date', 'Last Updated',
    ], rows)


def _purchases_table(project):
    purchases = project.purchases.select_related('unit', 'partner').order_by('date', 'created_at')
    rows = []
    for purchase in purchases:
        rows.append([
            str(purchase.id),
            purchase.date,
            purchase.category,
            purchase.description,
            purchase.quantity,
            purchase.unit_price,
            purchase.total_cost,
            purchase.unit.name if purchase.unit else '',
            purchase.partner.name if purchase.partner else '',
            purchase.receipt_url,
            _local_date(purchase.created_at),
        ])
    return ExportTable('Purchases', [
        'Purchase ID', 'Date', 'Category', 'Description', 'Quantity',
        'Unit Price', 'Total Cost', 'Unit Name', 'Partner Name',
        'Receipt URL', 'Created Date',
    ], rows)


def _summary_table(project):
    summary = project_summary(project.id)

    rows = [
        ['Total Units', summary['unit_count']],
        ['Total Partners', summary['partner_count']],
        ['Total Purchases', summary['purchase_count']],
        [],
        ['Total Budget', summary['total_budget']],
        ['Total Spent', summary['total_spent']],
        ['Remaining Budget', summary['remaining_budget']],
        ['Spent Percentage', summary['spent_percentage']],
        ['General Spending', summary['general_spent']],
        [],
        [CATEGORY_SPENDING_HEADING],
        ['Category', 'Total Spent', 'Purchases', 'Average Purchase'],
    ]
    for row in category_spending(project.id):
        rows.append([
            row['category'],
            row['total_spent'],
            row['purchase_count'],
            row['average_purchase'],
        ])

    rows += [
        [],
        [BUDGET_PLAN_HEADING],
        ['Category', 'Fraction', 'Budget Amount', 'Spent Amount', 'Remaining'],
    ]
    for row in category_budget_plan(project):
        rows.append([
            row['category'],
            row['fraction'],
            row['budget_amount'],
            row['spent_amount'],
            row['remaining'],
        ])

    return ExportTable('Summary', ['Metric', 'Value'], rows)


def build_export_tables(project):
    """
    Build every export table for a project.

    Cell values keep their Python types (Decimal, date, int, str); each
    writer converts them for its own target.

    Args:
        project (Project): The project to export.

    Returns:
        dict[str, ExportTable]: Tables keyed by title, in TABLE_ORDER.
    """
    builders = {
        'Projects': _projects_table,
        'Partners': _partners_table,
        'Units': _units_table,
        'Purchases': _purchases_table,
        'Summary': _summary_table,
    }
    return {title: builders[title](project) for title in TABLE_ORDER}
