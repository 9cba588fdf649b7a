import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Project, Partner, Unit


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user (project owner)."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Project Owner',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user who owns nothing."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as the project owner."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as another user."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def project(db, user):
    """Create and return a test project with the seed categories."""
    return Project.objects.create(
        owner=user,
        name='Nile View Residence',
        description='Four apartment renovation',
        location='Cairo',
        total_budget=Decimal('100000.00'),
    )


@pytest.fixture
def partner(db, project):
    """Create and return a partner on the test project."""
    return Partner.objects.create(
        project=project,
        name='Omar Hassan',
        email='omar@example.com',
        total_contribution=Decimal('25000.00'),
    )


@pytest.fixture
def unit(db, project, partner):
    """Create and return a unit on the test project."""
    return Unit.objects.create(
        project=project,
        name='Apt 1',
        type='Apartment',
        budget=Decimal('20000.00'),
        partner=partner,
    )


@pytest.fixture
def other_project(db, other_user):
    """Create and return a project owned by another user."""
    return Project.objects.create(
        owner=other_user,
        name='Other Villa',
        total_budget=Decimal('50000.00'),
    )


@pytest.fixture
def other_partner(db, other_project):
    """Create and return a partner on another user's project."""
    return Partner.objects.create(project=other_project, name='Stranger')
