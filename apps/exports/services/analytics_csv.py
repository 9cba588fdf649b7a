"""CSV download of the category spending analytics."""

import csv
import io

from django.utils import timezone
from django.utils.text import slugify

from apps.reports.services import category_spending

from .tables import ExportTable


CSV_CONTENT_TYPE = 'text/csv'


def analytics_table(project, since=None):
    """Category spending rows as an ExportTable."""
    rows = [
        [row['category'], row['total_spent'], row['purchase_count'], row['average_purchase']]
        for row in category_spending(project.id, since=since)
    ]
    return ExportTable(
        'Analytics',
        ['Category', 'Total Spent', 'Purchase Count', 'Average Purchase'],
        rows,
    )


def analytics_csv_bytes(project, since=None):
    """
    Render the category spending rows as CSV.

    The output is UTF-8 with a byte order mark so spreadsheet programs
    detect the encoding of non-ASCII category names.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    for row in analytics_table(project, since=since).values():
        writer.writerow(row)
    return output.getvalue().encode('utf-8-sig')


def analytics_filename(project, today=None):
    """File name like ``maadi_block_analytics_2024-05-01.csv``."""
    today = today or timezone.localdate()
    slug = slugify(project.name).replace('-', '_') or 'project'
    return f"{slug}_analytics_{today.isoformat()}.csv"
