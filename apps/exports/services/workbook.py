from io import BytesIO

from django.utils import timezone
from django.utils.text import slugify
from openpyxl import Workbook
from openpyxl.styles import Font

from .tables import build_export_tables


XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def build_workbook(project):
    """Return an openpyxl Workbook with one sheet per export table."""
    workbook = Workbook()
    # Drop the default empty sheet
    workbook.remove(workbook.active)

    header_font = Font(bold=True)
    for table in build_export_tables(project).values():
        sheet = workbook.create_sheet(title=table.title)
        sheet.append(table.headers)
        for cell in sheet[1]:
            cell.font = header_font
        for row in table.rows:
            sheet.append(row)
        sheet.freeze_panes = 'A2'

    return workbook


def workbook_bytes(project):
    buffer = BytesIO()
    build_workbook(project).save(buffer)
    return buffer.getvalue()


def export_filename(project, now=None):
    """File name like ``maadi_block_2024-05-01T10-30-00.xlsx``."""
    now = now or timezone.now()
    slug = slugify(project.name).replace('-', '_') or 'project'
    return f"{slug}_{now.strftime('%Y-%m-%dT%H-%M-%S')}.xlsx"
