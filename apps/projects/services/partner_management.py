"""Partner and unit management within a project."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.projects.models import Project, Partner, Unit

from .exceptions import PartnerNotFoundError, ProjectValidationError

logger = logging.getLogger(__name__)


def get_project_partner(*, project: Project, partner_id: UUID) -> Partner:
    """
    Resolve a partner reference inside a project.

    Raises:
        PartnerNotFoundError: If the partner is not part of the project
    """
    try:
        return project.partners.get(id=partner_id)
    except Partner.DoesNotExist:
        raise PartnerNotFoundError("Partner not found in this project")


def _check_partner(project: Project, partner: Optional[Partner]) -> None:
    if partner is not None and partner.project_id != project.id:
        raise ProjectValidationError("Partner belongs to a different project")


@transaction.atomic
def create_partner(*, project: Project, **fields) -> Partner:
    """Add a partner to the project."""
    partner = Partner.objects.create(project=project, **fields)
    logger.info("Added partner %s to project %s", partner.id, project.id)
    return partner


@transaction.atomic
def create_unit(*, project: Project, partner: Optional[Partner] = None, **fields) -> Unit:
    """
    Add a unit to the project.

    Raises:
        ProjectValidationError: If the partner is from another project
    """
    _check_partner(project, partner)
    unit = Unit.objects.create(project=project, partner=partner, **fields)
    logger.info("Added unit %s to project %s", unit.id, project.id)
    return unit


@transaction.atomic
def update_unit(*, unit: Unit, **changes) -> Unit:
    """
    Apply field changes to a unit.

    Raises:
        ProjectValidationError: If the partner is from another project
    """
    if 'partner' in changes:
        _check_partner(unit.project, changes['partner'])

    for field, value in changes.items():
        setattr(unit, field, value)
    unit.save()
    return unit
