from rest_framework import serializers
from .models import Project, Partner, Unit
from .services import normalize_categories, ProjectValidationError


class ProjectSerializer(serializers.ModelSerializer):
    """Main serializer for projects."""
    
    categories = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        help_text="Category labels. Defaults to the seed set when omitted."
    )
    
    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'description',
            'location',
            'total_budget',
            'categories',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
    
    def validate_categories(self, value):
        try:
            return normalize_categories(value)
        except ProjectValidationError as e:
            raise serializers.ValidationError(str(e))


class ProjectListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""
    
    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'location',
            'total_budget',
            'created_at',
        ]
        read_only_fields = fields


class CategoryInputSerializer(serializers.Serializer):
    """Validate a single category label for add/remove."""
    
    category = serializers.CharField(max_length=100)


class PartnerSerializer(serializers.ModelSerializer):
    """Serializer for project partners."""
    
    class Meta:
        model = Partner
        fields = [
            'id',
            'project',
            'name',
            'email',
            'phone',
            'total_contribution',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'project', 'created_at', 'updated_at']


class UnitSerializer(serializers.ModelSerializer):
    """Serializer for project units."""
    
    partner = serializers.PrimaryKeyRelatedField(
        queryset=Partner.objects.all(),
        allow_null=True,
        required=False
    )
    
    class Meta:
        model = Unit
        fields = [
            'id',
            'project',
            'name',
            'type',
            'budget',
            'status',
            'completion_date',
            'partner',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'project', 'created_at', 'updated_at']
    
    def validate(self, attrs):
        """Partner must belong to the unit's project."""
        project = self.context.get('project')
        if project is None and self.instance is not None:
            project = self.instance.project
        
        partner = attrs.get('partner')
        if partner is not None and project is not None and partner.project_id != project.id:
            raise serializers.ValidationError({
                'partner': 'Partner must belong to the same project'
            })
        
        return attrs
