from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.projects.services import get_project_for_owner, ProjectNotFoundError
from .services import (
    unit_costs,
    category_spending,
    category_budget_plan,
    project_summary,
    partner_balances,
    budget_alerts,
    monthly_trends,
)
from .presentation import (
    unit_cost_display,
    category_spending_display,
    budget_plan_display,
    format_currency,
    format_percentage,
)
from .serializers import (
    ReportPeriodQuerySerializer,
    UnitCostRowSerializer,
    CategorySpendingRowSerializer,
    BudgetPlanRowSerializer,
    MonthlyTrendRowSerializer,
    ProjectSummarySerializer,
    PartnerBalanceSerializer,
    BudgetAlertSerializer,
    ErrorSerializer,
)


MONTHS_PARAMETER = OpenApiParameter(
    'months', OpenApiTypes.INT,
    description='Only include purchases from the last N months (1-120). Omit for all time.'
)


def _not_found(error):
    return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)


def _since(request):
    """Cutoff date from the ?months= query parameter, or None."""
    query_serializer = ReportPeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    return query_serializer.validated_data['since']


@extend_schema(
    responses={200: UnitCostRowSerializer(many=True), 404: ErrorSerializer},
    description="Actual cost and budget usage per unit, ordered by unit name.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unit_cost_report(request, project_id):
    """Unit cost report - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    rows = [
        {**row, 'display': unit_cost_display(row)}
        for row in unit_costs(project.id)
    ]
    return Response(UnitCostRowSerializer(rows, many=True).data)


@extend_schema(
    parameters=[MONTHS_PARAMETER],
    responses={200: CategorySpendingRowSerializer(many=True), 404: ErrorSerializer},
    description="Spending per category, largest first.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def category_spending_report(request, project_id):
    """Category spending report - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    rows = [
        {**row, 'display': category_spending_display(row)}
        for row in category_spending(project.id, since=_since(request))
    ]
    return Response(CategorySpendingRowSerializer(rows, many=True).data)


@extend_schema(
    responses={200: BudgetPlanRowSerializer(many=True), 404: ErrorSerializer},
    description="Planned budget per category against actual spending.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_plan_report(request, project_id):
    """Category budget plan - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    rows = [
        {**row, 'display': budget_plan_display(row)}
        for row in category_budget_plan(project)
    ]
    return Response(BudgetPlanRowSerializer(rows, many=True).data)


@extend_schema(
    parameters=[MONTHS_PARAMETER],
    responses={200: ProjectSummarySerializer, 404: ErrorSerializer},
    description="Project dashboard totals.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def summary_report(request, project_id):
    """Project summary - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    data = project_summary(project.id, since=_since(request))
    data['display'] = {
        'total_budget': format_currency(data['total_budget']),
        'total_spent': format_currency(data['total_spent']),
        'remaining_budget': format_currency(data['remaining_budget']),
        'spent_percentage': format_percentage(data['spent_percentage']),
    }
    return Response(ProjectSummarySerializer(data).data)


@extend_schema(
    responses={200: PartnerBalanceSerializer(many=True), 404: ErrorSerializer},
    description="Partner contributions against purchases they paid for.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def partner_balance_report(request, project_id):
    """Partner balances - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    return Response(PartnerBalanceSerializer(partner_balances(project.id), many=True).data)


@extend_schema(
    parameters=[MONTHS_PARAMETER],
    responses={200: BudgetAlertSerializer(many=True), 404: ErrorSerializer},
    description="Budget warnings derived from the project rollups.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def alerts_report(request, project_id):
    """Budget alerts - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    alerts = budget_alerts(project.id, since=_since(request))
    return Response(BudgetAlertSerializer(alerts, many=True).data)


@extend_schema(
    parameters=[MONTHS_PARAMETER],
    responses={200: MonthlyTrendRowSerializer(many=True), 404: ErrorSerializer},
    description="Spending and purchase count per month, oldest first.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def trends_report(request, project_id):
    """Monthly trends - thin HTTP handler."""
    try:
        project = get_project_for_owner(project_id=project_id, owner=request.user)
    except ProjectNotFoundError as e:
        return _not_found(e)

    rows = [
        {**row, 'display': {'total_spent': format_currency(row['total_spent'])}}
        for row in monthly_trends(project.id, since=_since(request))
    ]
    return Response(MonthlyTrendRowSerializer(rows, many=True).data)
