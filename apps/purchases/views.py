import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Purchase
from .serializers import (
    PurchaseSerializer,
    PurchaseListSerializer,
    PurchaseFilterSerializer,
    PurchaseAllocationSerializer,
    GeneralPurchaseCreateSerializer,
)
from .services import (
    allocate_purchase,
    create_general_purchase,
    update_purchase,
    delete_purchase,
    PurchaseValidationError,
    ReferenceNotFoundError,
)
from apps.projects.permissions import IsProjectOwner
from apps.projects.services import get_project_for_owner, ProjectNotFoundError

logger = logging.getLogger(__name__)


def _error_response(error):
    """Convert a service error into an HTTP response."""
    if isinstance(error, (ReferenceNotFoundError, ProjectNotFoundError)):
        return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)

    logger.warning("Rejected purchase request: %s", error)
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Purchase CRUD operations.

    list: Get purchases of the user's projects (filterable)
    create: Create a general purchase (not charged to a unit)
    retrieve: Get a specific purchase
    update: Update a purchase (total cost follows quantity/price)
    destroy: Delete a purchase
    allocate: Create purchases for one or more units from a form submission
    """

    serializer_class = PurchaseSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]
    pagination_class = PurchasePagination

    def get_queryset(self):
        """Filter purchases using input serializer validation."""
        queryset = Purchase.objects.filter(
            project__owner=self.request.user
        ).select_related('project', 'unit', 'partner')

        if self.action != 'list':
            return queryset

        # Validate query parameters using input serializer
        filter_serializer = PurchaseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'project' in params:
            queryset = queryset.filter(project_id=params['project'])
        if 'unit' in params:
            queryset = queryset.filter(unit_id=params['unit'])
        if 'partner' in params:
            queryset = queryset.filter(partner_id=params['partner'])
        if 'category' in params:
            queryset = queryset.filter(category=params['category'])

        # Filter by date range
        if 'date_from' in params:
            queryset = queryset.filter(date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(date__lte=params['date_to'])

        return queryset

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return PurchaseListSerializer
        elif self.action == 'create':
            return GeneralPurchaseCreateSerializer
        elif self.action == 'allocate':
            return PurchaseAllocationSerializer
        return PurchaseSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('project', str, description='Project ID'),
            OpenApiParameter('unit', str, description='Unit ID'),
            OpenApiParameter('partner', str, description='Partner ID'),
            OpenApiParameter('category', str, description='Category label'),
            OpenApiParameter('date_from', str, description='From date (YYYY-MM-DD)'),
            OpenApiParameter('date_to', str, description='To date (YYYY-MM-DD)'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=GeneralPurchaseCreateSerializer, responses={201: PurchaseSerializer})
    def create(self, request, *args, **kwargs):
        """Create a general purchase."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            project = get_project_for_owner(project_id=data.pop('project'), owner=request.user)
            purchase = create_general_purchase(project=project, **data)
        except (ProjectNotFoundError, PurchaseValidationError, ReferenceNotFoundError) as e:
            return _error_response(e)

        return Response(PurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a purchase."""
        partial = kwargs.pop('partial', False)
        purchase = self.get_object()
        serializer = self.get_serializer(purchase, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = update_purchase(purchase=purchase, **serializer.validated_data)
        except (PurchaseValidationError, ReferenceNotFoundError) as e:
            return _error_response(e)

        return Response(PurchaseSerializer(purchase).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a purchase."""
        delete_purchase(purchase=self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=PurchaseAllocationSerializer, responses={201: PurchaseSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def allocate(self, request):
        """
        Allocate one purchase submission to units.

        POST /api/purchases/allocate/
        Body: {"project": "...", "target_units": ["...", "..."],
               "distribute_evenly": true, ...}
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        try:
            project = get_project_for_owner(project_id=data.pop('project'), owner=request.user)
            purchases = allocate_purchase(project=project, **data)
        except (ProjectNotFoundError, PurchaseValidationError, ReferenceNotFoundError) as e:
            return _error_response(e)

        return Response(
            PurchaseSerializer(purchases, many=True).data,
            status=status.HTTP_201_CREATED
        )
