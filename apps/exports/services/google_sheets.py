"""
Push project export tables to a Google Sheets spreadsheet.

Authentication uses a service account. GOOGLE_SERVICE_ACCOUNT_JSON holds
either the path to the key file or the key JSON itself.
"""

import json
import logging
from datetime import date
from decimal import Decimal

import gspread
from django.conf import settings
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from .exceptions import SpreadsheetSyncError
from .tables import build_export_tables


logger = logging.getLogger(__name__)


def _sheet_value(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def get_sheets_client():
    """
    Build an authorized gspread client from settings.

    Raises:
        SpreadsheetSyncError: If credentials are missing or unusable
    """
    raw = settings.GOOGLE_SERVICE_ACCOUNT_JSON.strip()
    if not raw:
        raise SpreadsheetSyncError("Google service account credentials are not configured")

    scopes = settings.GOOGLE_SHEETS_SCOPES
    try:
        if raw.startswith('{'):
            creds = Credentials.from_service_account_info(json.loads(raw), scopes=scopes)
        else:
            creds = Credentials.from_service_account_file(raw, scopes=scopes)
    except (OSError, ValueError, GoogleAuthError) as e:
        logger.error("Invalid Google service account credentials: %s", e)
        raise SpreadsheetSyncError("Google service account credentials are invalid")

    return gspread.authorize(creds)


def sync_project_to_google_sheets(*, project, spreadsheet_id, client=None):
    """
    Overwrite one worksheet per export table in the target spreadsheet.

    Missing worksheets are created, existing ones are cleared first. All
    tables are written in a single batch request with USER_ENTERED input
    so Sheets parses numbers and dates.

    Args:
        project (Project): The project to export.
        spreadsheet_id (str): Key of the target spreadsheet.
        client (gspread.Client, optional): Pre-built client (tests, reuse).

    Returns:
        list[str]: Titles of the updated worksheets.

    Raises:
        SpreadsheetSyncError: On missing credentials, auth failures or
            Sheets API errors
    """
    tables = build_export_tables(project)

    try:
        if client is None:
            client = get_sheets_client()

        spreadsheet = client.open_by_key(spreadsheet_id)
        existing = {worksheet.title: worksheet for worksheet in spreadsheet.worksheets()}

        data = []
        for title, table in tables.items():
            values = [[_sheet_value(value) for value in row] for row in table.values()]
            worksheet = existing.get(title)
            if worksheet is None:
                width = max(len(row) for row in values)
                worksheet = spreadsheet.add_worksheet(
                    title=title,
                    rows=max(len(values), 100),
                    cols=max(width, 26),
                )
            else:
                worksheet.clear()
            data.append({'range': f"'{title}'!A1", 'values': values})

        spreadsheet.values_batch_update({
            'valueInputOption': 'USER_ENTERED',
            'data': data,
        })
    except gspread.exceptions.SpreadsheetNotFound:
        logger.error("Spreadsheet %s not found or not shared", spreadsheet_id)
        raise SpreadsheetSyncError("Spreadsheet not found or not shared with the service account")
    except (gspread.exceptions.GSpreadException, GoogleAuthError) as e:
        logger.error("Google Sheets sync failed for project %s: %s", project.id, e)
        raise SpreadsheetSyncError("Failed to update Google Sheets")

    logger.info(
        "Synced project %s to spreadsheet %s (%d sheets)",
        project.id, spreadsheet_id, len(tables)
    )
    return list(tables)
