from django.contrib import admin
from .models import Purchase
from .services import compute_total_cost


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """Admin interface for purchases."""

    list_display = [
        'description',
        'project',
        'get_unit_name',
        'category',
        'quantity',
        'unit_price',
        'total_cost',
        'date',
    ]

    list_filter = [
        'category',
        'date',
        'created_at',
    ]

    search_fields = [
        'description',
        'category',
        'project__name',
        'unit__name',
        'partner__name',
    ]

    readonly_fields = [
        'total_cost',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'date'
    ordering = ['-date', '-created_at']

    fieldsets = (
        ('Purchase Information', {
            'fields': (
                'project',
                'unit',
                'partner',
                'category',
                'description',
                'date',
            )
        }),
        ('Financial Details', {
            'fields': (
                'quantity',
                'unit_price',
                'total_cost',
                'receipt_url',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_unit_name(self, obj):
        """Display unit name or General."""
        if obj.unit:
            return obj.unit.name
        return "General"
    get_unit_name.short_description = 'Unit'
    get_unit_name.admin_order_field = 'unit__name'

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('project', 'unit', 'partner')

    def save_model(self, request, obj, form, change):
        """Keep total cost in line with quantity and unit price."""
        obj.total_cost = compute_total_cost(obj.quantity, obj.unit_price)
        super().save_model(request, obj, form, change)
