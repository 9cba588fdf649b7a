"""
Service layer unit tests for projects app.

Tests cover:
- Category list normalization
- Owner scoping of lookups
- Partner/unit project consistency
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.projects.models import Project
from apps.projects.services import (
    normalize_categories,
    get_project_for_owner,
    create_project,
    update_project,
    add_category,
    remove_category,
    get_project_partner,
    create_unit,
)
from apps.projects.services.exceptions import (
    ProjectNotFoundError,
    PartnerNotFoundError,
    ProjectValidationError,
)


class TestNormalizeCategories:
    """Tests for normalize_categories()."""

    def test_strips_and_preserves_order(self):
        assert normalize_categories([' Kitchen', 'Bathroom ']) == ['Kitchen', 'Bathroom']

    def test_rejects_blank_label(self):
        with pytest.raises(ProjectValidationError):
            normalize_categories(['Kitchen', '   '])

    def test_rejects_duplicate(self):
        with pytest.raises(ProjectValidationError):
            normalize_categories(['Kitchen', 'Kitchen '])

    def test_rejects_empty_list(self):
        with pytest.raises(ProjectValidationError):
            normalize_categories([])


@pytest.mark.django_db
class TestProjectManagement:
    """Tests for project_management.py service functions."""

    def test_create_project_defaults(self, user):
        project = create_project(owner=user, name='Loft')

        assert project.total_budget == Decimal('0.00')
        assert 'Kitchen' in project.categories

    def test_create_project_negative_budget(self, user):
        with pytest.raises(ProjectValidationError):
            create_project(owner=user, name='Loft', total_budget=Decimal('-5'))

        assert not Project.objects.filter(name='Loft').exists()

    def test_get_project_for_owner(self, user, project):
        assert get_project_for_owner(project_id=project.id, owner=user) == project

    def test_get_project_for_wrong_owner(self, other_user, project):
        with pytest.raises(ProjectNotFoundError):
            get_project_for_owner(project_id=project.id, owner=other_user)

    def test_get_missing_project(self, user):
        with pytest.raises(ProjectNotFoundError):
            get_project_for_owner(project_id=uuid4(), owner=user)

    def test_update_project_categories_normalized(self, project):
        project = update_project(project=project, categories=['A ', 'B'])

        project.refresh_from_db()
        assert project.categories == ['A', 'B']

    def test_add_and_remove_category(self, project):
        add_category(project=project, category='Landscaping')
        assert project.has_category('Landscaping')

        remove_category(project=project, category='Landscaping')
        project.refresh_from_db()
        assert not project.has_category('Landscaping')

    def test_cannot_remove_last_category(self, user):
        project = create_project(owner=user, name='Tiny', categories=['Only'])

        with pytest.raises(ProjectValidationError):
            remove_category(project=project, category='Only')


@pytest.mark.django_db
class TestPartnerManagement:
    """Tests for partner_management.py service functions."""

    def test_get_project_partner(self, project, partner):
        assert get_project_partner(project=project, partner_id=partner.id) == partner

    def test_get_partner_from_other_project(self, project, other_partner):
        with pytest.raises(PartnerNotFoundError):
            get_project_partner(project=project, partner_id=other_partner.id)

    def test_create_unit_with_foreign_partner(self, project, other_partner):
        with pytest.raises(ProjectValidationError):
            create_unit(project=project, partner=other_partner, name='Apt 9', type='Apartment')

        assert not project.units.exists()
