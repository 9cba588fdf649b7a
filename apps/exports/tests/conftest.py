import pytest
from decimal import Decimal
from datetime import date
from unittest.mock import MagicMock
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
def export_owner(db):
    """Create and return the project owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def export_outsider(db):
    """Create and return a user who owns no projects."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def owner_client(api_client, export_owner):
    """Return API client authenticated as project owner."""
    refresh = RefreshToken.for_user(export_owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def outsider_client(export_outsider):
    """Return API client authenticated as outsider."""
    client = APIClient()
    refresh = RefreshToken.for_user(export_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def export_project(db, export_owner):
    """
    Create a project with one partner, two units and three purchases.

    Apt 1 (budget 1000.00) has 600.00 of purchases, Apt 2 (budget 2000.00)
    has none, and one 400.00 purchase is general.
    """
    project = Project.objects.create(
        owner=export_owner,
        name='Maadi Block',
        location='Cairo',
        total_budget=Decimal('10000.00'),
    )
    partner = Partner.objects.create(
        project=project,
        name='Youssef',
        total_contribution=Decimal('5000.00'),
    )
    apt1 = Unit.objects.create(project=project, name='Apt 1', type='Apartment',
                               budget=Decimal('1000.00'), partner=partner)
    Unit.objects.create(project=project, name='Apt 2', type='Apartment',
                        budget=Decimal('2000.00'))

    Purchase.objects.create(
        project=project, unit=apt1, partner=partner, date=date(2024, 3, 1),
        category='Kitchen', description='Cabinets', quantity=Decimal('2.000'),
        unit_price=Decimal('250.00'), total_cost=Decimal('500.00'),
    )
    Purchase.objects.create(
        project=project, unit=apt1, date=date(2024, 3, 2),
        category='Electrical', description='Cable', quantity=Decimal('1.000'),
        unit_price=Decimal('100.00'), total_cost=Decimal('100.00'),
    )
    Purchase.objects.create(
        project=project, date=date(2024, 3, 3),
        category='Kitchen', description='Site fence', quantity=Decimal('1.000'),
        unit_price=Decimal('400.00'), total_cost=Decimal('400.00'),
    )
    return project


@pytest.fixture
def sheets_client():
    """
    Return a mocked gspread client whose spreadsheet already has a
    'Projects' worksheet.
    """
    client = MagicMock()
    spreadsheet = client.open_by_key.return_value
    projects_sheet = MagicMock()
    projects_sheet.title = 'Projects'
    spreadsheet.worksheets.return_value = [projects_sheet]
    return client
