import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.projects.models import Project


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a project owner with no projects."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return a deactivated owner."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def owner_projects(db, user):
    """Give the user two projects."""
    return [
        Project.objects.create(owner=user, name='Villa', total_budget=Decimal('50000.00')),
        Project.objects.create(owner=user, name='Shop Fit-out'),
    ]


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
