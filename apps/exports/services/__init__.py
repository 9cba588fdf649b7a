"""
Exports app services layer.

Builds tabular snapshots of a project and writes them to an Excel
workbook, a CSV file or a Google Sheets spreadsheet.
"""

from .exceptions import (
    ExportsServiceError,
    ExportDependencyError,
    SpreadsheetSyncError,
)

from .tables import (
    ExportTable,
    build_export_tables,
)

from .workbook import (
    XLSX_CONTENT_TYPE,
    build_workbook,
    workbook_bytes,
    export_filename,
)

from .analytics_csv import (
    CSV_CONTENT_TYPE,
    analytics_table,
    analytics_csv_bytes,
    analytics_filename,
)

from .google_sheets import (
    get_sheets_client,
    sync_project_to_google_sheets,
)


__all__ = [
    # Exceptions
    'ExportsServiceError',
    'ExportDependencyError',
    'SpreadsheetSyncError',

    # Tables
    'ExportTable',
    'build_export_tables',

    # Workbook
    'XLSX_CONTENT_TYPE',
    'build_workbook',
    'workbook_bytes',
    'export_filename',

    # Analytics CSV
    'CSV_CONTENT_TYPE',
    'analytics_table',
    'analytics_csv_bytes',
    'analytics_filename',

    # Google Sheets
    'get_sheets_client',
    'sync_project_to_google_sheets',
]
