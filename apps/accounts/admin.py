from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for project owner accounts."""

    list_display = ['email', 'display_name', 'project_count', 'is_active', 'created_at']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'display_name']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []

    fieldsets = (
        (None, {'fields': ('email', 'display_name', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Activity', {'fields': ('created_at', 'last_login')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(num_projects=Count('projects'))

    @admin.display(description='Projects', ordering='num_projects')
    def project_count(self, obj):
        return obj.num_projects
