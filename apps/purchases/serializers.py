from rest_framework import serializers
from .models import Purchase
from apps.projects.models import Unit, Partner


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        project (UUID): Filter by project ID
        unit (UUID): Filter by unit ID
        partner (UUID): Filter by partner ID
        category (str): Filter by exact category label
        date_from (date): Filter purchases from this date
        date_to (date): Filter purchases to this date
    """

    project = serializers.UUIDField(required=False)
    unit = serializers.UUIDField(required=False)
    partner = serializers.UUIDField(required=False)
    category = serializers.CharField(max_length=100, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class PurchaseAllocationSerializer(serializers.Serializer):
    """
    Validate a purchase form submission for allocation.

    Fields:
        project (UUID): Project the purchase belongs to
        target_units (list[UUID]): Units to charge, in order
        partner (UUID): Optional paying partner
        distribute_evenly (bool): Split across all target units
    """

    project = serializers.UUIDField()
    date = serializers.DateField()
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=450)
    quantity = serializers.DecimalField(max_digits=10, decimal_places=3)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    target_units = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False
    )
    partner = serializers.UUIDField(required=False, allow_null=True)
    distribute_evenly = serializers.BooleanField(default=False)
    receipt_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')


class GeneralPurchaseCreateSerializer(serializers.Serializer):
    """Validate creation of a purchase not charged to any unit."""

    project = serializers.UUIDField()
    date = serializers.DateField()
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500)
    quantity = serializers.DecimalField(max_digits=10, decimal_places=3)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    partner = serializers.UUIDField(required=False, allow_null=True)
    receipt_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class PurchaseSerializer(serializers.ModelSerializer):
    """
    Main serializer for purchases (read and update).

    total_cost is read-only; it follows quantity and unit_price.
    """

    unit = serializers.PrimaryKeyRelatedField(
        queryset=Unit.objects.all(),
        allow_null=True,
        required=False
    )
    partner = serializers.PrimaryKeyRelatedField(
        queryset=Partner.objects.all(),
        allow_null=True,
        required=False
    )
    unit_name = serializers.CharField(source='unit.name', read_only=True, default=None)
    partner_name = serializers.CharField(source='partner.name', read_only=True, default=None)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'project',
            'unit',
            'unit_name',
            'partner',
            'partner_name',
            'date',
            'category',
            'description',
            'quantity',
            'unit_price',
            'total_cost',
            'receipt_url',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'project',
            'total_cost',
            'created_at',
            'updated_at',
        ]


class PurchaseListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    unit_name = serializers.CharField(source='unit.name', read_only=True, default=None)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'project',
            'unit',
            'unit_name',
            'partner',
            'date',
            'category',
            'description',
            'quantity',
            'unit_price',
            'total_cost',
        ]
        read_only_fields = fields
