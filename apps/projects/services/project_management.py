"""
Project management service.

Handles project CRUD and category list maintenance. Every lookup is
scoped to the owning user; another user's project is reported as missing.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.projects.models import Project, default_categories

from .exceptions import ProjectNotFoundError, ProjectValidationError

logger = logging.getLogger(__name__)


def normalize_categories(categories: Iterable[str]) -> List[str]:
    """
    Clean a submitted category list.

    Labels are stripped of surrounding whitespace; order is preserved.

    Raises:
        ProjectValidationError: On an empty list, a blank label or a duplicate
    """
    cleaned = []
    for raw in categories:
        label = str(raw).strip()
        if not label:
            raise ProjectValidationError("Category labels cannot be blank")
        if label in cleaned:
            raise ProjectValidationError(f"Duplicate category: {label}")
        cleaned.append(label)

    if not cleaned:
        raise ProjectValidationError("A project needs at least one category")

    return cleaned


def get_project_for_owner(*, project_id: UUID, owner: User) -> Project:
    """
    Fetch a project owned by the given user.

    Raises:
        ProjectNotFoundError: If the project does not exist or is not owned by user
    """
    try:
        return Project.objects.get(id=project_id, owner=owner)
    except Project.DoesNotExist:
        raise ProjectNotFoundError("Project not found")


@transaction.atomic
def create_project(
    *,
    owner: User,
    name: str,
    total_budget: Decimal = Decimal('0.00'),
    description: str = '',
    location: str = '',
    categories: Optional[Iterable[str]] = None
) -> Project:
    """
    Create a new project for the owner.

    When no categories are given the project starts with the seed set
    from settings.DEFAULT_PROJECT_CATEGORIES.

    Raises:
        ProjectValidationError: If total_budget is negative or categories are invalid
    """
    if total_budget < 0:
        raise ProjectValidationError("Total budget cannot be negative")

    if categories is None:
        categories = default_categories()
    else:
        categories = normalize_categories(categories)

    project = Project.objects.create(
        owner=owner,
        name=name,
        total_budget=total_budget,
        description=description,
        location=location,
        categories=categories,
    )

    logger.info("Created project %s for user %s", project.id, owner.id)
    return project


@transaction.atomic
def update_project(*, project: Project, **changes) -> Project:
    """
    Apply field changes to a project.

    Raises:
        ProjectValidationError: If total_budget is negative or categories are invalid
    """
    if 'total_budget' in changes and changes['total_budget'] < 0:
        raise ProjectValidationError("Total budget cannot be negative")

    if 'categories' in changes:
        changes['categories'] = normalize_categories(changes['categories'])

    for field, value in changes.items():
        setattr(project, field, value)
    project.save()

    return project


@transaction.atomic
def add_category(*, project: Project, category: str) -> Project:
    """Append a custom category label to the project."""
    project.categories = normalize_categories([*project.categories, category])
    project.save(update_fields=['categories', 'updated_at'])
    return project


@transaction.atomic
def remove_category(*, project: Project, category: str) -> Project:
    """
    Drop a category label from the project.

    Existing purchases keep their category text; they still appear in
    category spending but no longer in the budget plan.

    Raises:
        ProjectValidationError: If the label is unknown or is the last one
    """
    if category not in project.categories:
        raise ProjectValidationError(f"Unknown category: {category}")

    project.categories = normalize_categories(
        [c for c in project.categories if c != category]
    )
    project.save(update_fields=['categories', 'updated_at'])
    return project


def delete_project(*, project: Project) -> None:
    """Delete a project together with its partners, units and purchases."""
    project_id = project.id
    project.delete()
    logger.info("Deleted project %s", project_id)
