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
def purchase_owner(db):
    """Create and return the project owner who records purchases."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Project Owner',
    )


@pytest.fixture
def purchase_outsider(db):
    """Create and return a user who owns no projects."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider User',
    )


@pytest.fixture
def owner_client(api_client, purchase_owner):
    """Return API client authenticated as project owner."""
    refresh = RefreshToken.for_user(purchase_owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def outsider_client(purchase_outsider):
    """Return API client authenticated as outsider."""
    client = APIClient()
    refresh = RefreshToken.for_user(purchase_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def purchase_project(db, purchase_owner):
    """Create and return a project with the seed categories."""
    return Project.objects.create(
        owner=purchase_owner,
        name='Palm Towers',
        total_budget=Decimal('100000.00'),
    )


@pytest.fixture
def purchase_partner(db, purchase_project):
    """Create and return a partner on the project."""
    return Partner.objects.create(
        project=purchase_project,
        name='Karim Adel',
        total_contribution=Decimal('30000.00'),
    )


@pytest.fixture
def purchase_units(db, purchase_project):
    """Create and return three units, in creation order."""
    return [
        Unit.objects.create(
            project=purchase_project,
            name=f'Apt {n}',
            type='Apartment',
            budget=Decimal('10000.00'),
        )
        for n in (1, 2, 3)
    ]


@pytest.fixture
def other_project_unit(db, purchase_outsider):
    """Create and return a unit on another user's project."""
    project = Project.objects.create(owner=purchase_outsider, name='Elsewhere')
    return Unit.objects.create(project=project, name='Apt X', type='Apartment')


@pytest.fixture
def unit_purchase(db, purchase_project, purchase_units):
    """Create and return a purchase charged to the first unit."""
    return Purchase.objects.create(
        project=purchase_project,
        unit=purchase_units[0],
        date=date(2024, 3, 1),
        category='Kitchen',
        description='Sink',
        quantity=Decimal('2.000'),
        unit_price=Decimal('150.00'),
        total_cost=Decimal('300.00'),
    )


@pytest.fixture
def general_purchase(db, purchase_project):
    """Create and return a purchase not charged to a unit."""
    return Purchase.objects.create(
        project=purchase_project,
        date=date(2024, 4, 15),
        category='Other',
        description='Site fencing',
        quantity=Decimal('1.000'),
        unit_price=Decimal('800.00'),
        total_cost=Decimal('800.00'),
    )
