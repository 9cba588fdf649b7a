"""
Custom permission classes for projects app.

Permission Classes:
    IsProjectOwner - Object must belong to a project owned by the user

Usage:
    from apps.projects.permissions import IsProjectOwner

    class UnitViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsProjectOwner]
"""

from rest_framework.permissions import BasePermission


def project_of(obj):
    """Return the project an object belongs to (or the object itself)."""
    return getattr(obj, 'project', obj)


class IsProjectOwner(BasePermission):
    """
    Permission: User must own the project.

    Works for Project instances and for anything with a ``project``
    attribute (Partner, Unit, Purchase).
    """

    message = 'You do not have access to this project.'

    def has_object_permission(self, request, view, obj):
        return project_of(obj).owner_id == request.user.id
