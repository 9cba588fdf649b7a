from django.http import HttpResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.projects.services import get_project_for_owner, ProjectNotFoundError
from apps.reports.serializers import ErrorSerializer, ReportPeriodQuerySerializer
from apps.reports.views import MONTHS_PARAMETER
from .serializers import GoogleSheetsSyncSerializer, GoogleSheetsSyncResultSerializer
from .services import (
    XLSX_CONTENT_TYPE,
    workbook_bytes,
    export_filename,
    CSV_CONTENT_TYPE,
    analytics_csv_bytes,
    analytics_filename,
    sync_project_to_google_sheets,
    SpreadsheetSyncError,
)


@extend_schema(
    responses={
        (200, XLSX_CONTENT_TYPE): OpenApiResponse(description="Excel workbook"),
        404: ErrorSerializer,
    },
    description="Download the project as an Excel workbook.",
    tags=['exports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def xlsx_export(request, project_id):
    """Workbook download - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    response = HttpResponse(workbook_bytes(project), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{export_filename(project)}"'
    return response


@extend_schema(
    parameters=[MONTHS_PARAMETER],
    responses={
        (200, CSV_CONTENT_TYPE): OpenApiResponse(description="Category spending CSV"),
        404: ErrorSerializer,
    },
    description="Download the category spending analytics as CSV.",
    tags=['exports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_csv_export(request, project_id):
    """Analytics CSV download - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    query_serializer = ReportPeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    content = analytics_csv_bytes(project, since=query_serializer.validated_data['since'])
    response = HttpResponse(content, content_type=f'{CSV_CONTENT_TYPE}; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{analytics_filename(project)}"'
    return response


@extend_schema(
    request=GoogleSheetsSyncSerializer,
    responses={
        200: GoogleSheetsSyncResultSerializer,
        400: OpenApiResponse(description="Validation error"),
        404: ErrorSerializer,
        502: ErrorSerializer,
    },
    description="Overwrite the project's sheets in a Google Sheets spreadsheet.",
    tags=['exports'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def google_sheets_sync(request, project_id):
    """Google Sheets sync - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    serializer = GoogleSheetsSyncSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        titles = sync_project_to_google_sheets(
            project=project,
            spreadsheet_id=serializer.validated_data['spreadsheet_id'],
        )
    except SpreadsheetSyncError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response(GoogleSheetsSyncResultSerializer({
        'success': True,
        'message': 'Data successfully synced to Google Sheets',
        'updated_sheets': titles,
    }).data)
