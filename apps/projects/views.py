from rest_framework import viewsets, mixins, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Project, Partner, Unit
from .serializers import (
    ProjectSerializer,
    ProjectListSerializer,
    CategoryInputSerializer,
    PartnerSerializer,
    UnitSerializer,
)
from .permissions import IsProjectOwner
from .services import (
    create_project,
    update_project,
    delete_project,
    add_category,
    remove_category,
    create_partner,
    create_unit,
    update_unit,
    ProjectValidationError,
)


class ProjectPagination(PageNumberPagination):
    """Custom pagination for projects."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Project CRUD operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get the current user's projects
    create: Create a new project (seed categories by default)
    retrieve: Get a specific project
    update: Update a project
    destroy: Delete a project and everything under it
    """

    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]
    pagination_class = ProjectPagination

    def get_queryset(self):
        """Return only projects owned by the user."""
        return Project.objects.filter(owner=self.request.user)

    def get_serializer_class(self):
        if self.action == 'list':
            return ProjectListSerializer
        return ProjectSerializer

    def create(self, request, *args, **kwargs):
        """Create a new project."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            project = create_project(owner=request.user, **serializer.validated_data)
        except ProjectValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update project details."""
        partial = kwargs.pop('partial', False)
        project = self.get_object()
        serializer = self.get_serializer(project, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            project = update_project(project=project, **serializer.validated_data)
        except ProjectValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProjectSerializer(project).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a project."""
        delete_project(project=self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=PartnerSerializer, responses={200: PartnerSerializer(many=True), 201: PartnerSerializer})
    @action(detail=True, methods=['get', 'post'])
    def partners(self, request, pk=None):
        """
        List or add partners of a project.

        GET/POST /api/projects/{id}/partners/
        """
        project = self.get_object()

        if request.method == 'GET':
            partners = project.partners.order_by('name')
            return Response(PartnerSerializer(partners, many=True).data)

        serializer = PartnerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        partner = create_partner(project=project, **serializer.validated_data)
        return Response(PartnerSerializer(partner).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UnitSerializer, responses={200: UnitSerializer(many=True), 201: UnitSerializer})
    @action(detail=True, methods=['get', 'post'])
    def units(self, request, pk=None):
        """
        List or add units of a project.

        GET/POST /api/projects/{id}/units/
        """
        project = self.get_object()

        if request.method == 'GET':
            units = project.units.select_related('partner').order_by('name')
            return Response(UnitSerializer(units, many=True).data)

        serializer = UnitSerializer(data=request.data, context={'project': project})
        serializer.is_valid(raise_exception=True)

        try:
            unit = create_unit(project=project, **serializer.validated_data)
        except ProjectValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UnitSerializer(unit).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CategoryInputSerializer, responses={200: ProjectSerializer})
    @action(detail=True, methods=['post', 'delete'])
    def categories(self, request, pk=None):
        """
        Add or remove a category label.

        POST/DELETE /api/projects/{id}/categories/
        Body: {"category": "Landscaping"}
        """
        project = self.get_object()

        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = serializer.validated_data['category']

        try:
            if request.method == 'POST':
                project = add_category(project=project, category=category)
            else:
                project = remove_category(project=project, category=category)
        except ProjectValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProjectSerializer(project).data)


class PartnerViewSet(mixins.RetrieveModelMixin,
                     mixins.UpdateModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    Retrieve, update or delete a single partner.

    Deleting a partner clears it from units and purchases; they are kept.
    """

    serializer_class = PartnerSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]

    def get_queryset(self):
        return Partner.objects.filter(
            project__owner=self.request.user
        ).select_related('project')


class UnitViewSet(mixins.RetrieveModelMixin,
                  mixins.UpdateModelMixin,
                  mixins.DestroyModelMixin,
                  viewsets.GenericViewSet):
    """
    Retrieve, update or delete a single unit.

    Deleting a unit turns its purchases into general (unassigned) purchases.
    """

    serializer_class = UnitSerializer
    permission_classes = [IsAuthenticated, IsProjectOwner]

    def get_queryset(self):
        return Unit.objects.filter(
            project__owner=self.request.user
        ).select_related('project', 'partner')

    def perform_update(self, serializer):
        try:
            update_unit(unit=serializer.instance, **serializer.validated_data)
        except ProjectValidationError as e:
            raise serializers.ValidationError({'partner': str(e)})

