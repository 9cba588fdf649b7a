from django.contrib import admin
from .models import Project, Partner, Unit


class PartnerInline(admin.TabularInline):
    model = Partner
    extra = 0
    fields = ['name', 'email', 'phone', 'total_contribution', 'status']


class UnitInline(admin.TabularInline):
    model = Unit
    extra = 0
    fields = ['name', 'type', 'budget', 'status', 'completion_date', 'partner']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for projects."""

    list_display = ['name', 'owner', 'location', 'total_budget', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'location', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [PartnerInline, UnitInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('owner')


@admin.register(Partner)
class PartnerAdmin(admin.ModelAdmin):
    list_display = ['name', 'project', 'total_contribution', 'status']
    list_filter = ['status']
    search_fields = ['name', 'email', 'project__name']


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ['name', 'project', 'type', 'budget', 'status', 'completion_date']
    list_filter = ['status', 'type']
    search_fields = ['name', 'project__name']
