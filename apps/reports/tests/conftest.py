import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Project, Partner, Unit
from apps.purchases.models import Purchase


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def report_owner(db):
    """Create and return the project owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Report Owner',
    )


@pytest.fixture
def report_outsider(db):
    """Create and return a user who owns no projects."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def owner_client(api_client, report_owner):
    """Return API client authenticated as project owner."""
    refresh = RefreshToken.for_user(report_owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def outsider_client(report_outsider):
    """Return API client authenticated as outsider."""
    client = APIClient()
    refresh = RefreshToken.for_user(report_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def report_project(db, report_owner):
    """Create and return a project with a 100000.00 budget."""
    return Project.objects.create(
        owner=report_owner,
        name='Maadi Block',
        total_budget=Decimal('100000.00'),
    )


@pytest.fixture
def empty_project(db, report_owner):
    """Create and return a project with no units or purchases."""
    return Project.objects.create(owner=report_owner, name='Empty Lot')


@pytest.fixture
def make_purchase(db):
    """Return a factory creating purchases with a given total."""
    def _make(project, total, category='Kitchen', unit=None, partner=None, description='Item', on=None):
        total = Decimal(total)
        return Purchase.objects.create(
            project=project,
            unit=unit,
            partner=partner,
            date=on or date(2024, 5, 1),
            category=category,
            description=description,
            quantity=Decimal('1.000'),
            unit_price=total,
            total_cost=total,
        )
    return _make


@pytest.fixture
def report_units(db, report_project):
    """Create units with budgets 1000.00 (b-unit), 2000.00 (A-unit) and 0 (a-unit)."""
    return {
        'b': Unit.objects.create(project=report_project, name='b-unit', type='Studio', budget=Decimal('1000.00')),
        'A': Unit.objects.create(project=report_project, name='A-unit', type='Apartment', budget=Decimal('2000.00')),
        'a': Unit.objects.create(project=report_project, name='a-unit', type='Shop', budget=Decimal('0.00')),
    }


@pytest.fixture
def report_partner(db, report_project):
    """Create and return a partner contributing 5000.00."""
    return Partner.objects.create(
        project=report_project,
        name='Youssef',
        total_contribution=Decimal('5000.00'),
    )
