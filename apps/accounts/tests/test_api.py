import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'tokens' in response.data
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_without_display_name(self, api_client):
        """Register without display name (optional field)."""
        url = reverse('users:register')
        data = {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_duplicate_email_other_case(self, api_client, user):
        """An email that differs only by case is already taken."""
        url = reverse('users:register')
        data = {
            'email': 'TestUser@Example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'An account with this email already exists'
        assert User.objects.count() == 1

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Valid credentials return tokens."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'testuser@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_wrong_password(self, api_client, user):
        """Wrong password returns 401."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'testuser@example.com',
            'password': 'WrongPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_nonexistent_user(self, api_client):
        """Unknown email returns 401."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'nobody@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        """Deactivated account returns 403."""
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'inactive@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        """Successful login stamps last_login."""
        assert user.last_login is None
        url = reverse('users:login')
        api_client.post(url, {
            'email': 'testuser@example.com',
            'password': 'TestPass123!',
        })

        user.refresh_from_db()
        assert user.last_login is not None


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/ and PATCH /api/auth/user/update/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_display_name(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'display_name': 'Site Manager'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.display_name == 'Site Manager'

    def test_cannot_update_email(self, authenticated_client, user):
        """Email is read-only on the profile endpoint."""
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'email': 'changed@example.com'})

        user.refresh_from_db()
        assert user.email == 'testuser@example.com'

    def test_project_count(self, authenticated_client, owner_projects):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.data['project_count'] == 2

    def test_project_count_read_only(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'project_count': 7})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['project_count'] == 0


@pytest.mark.django_db
class TestUserManager:
    """Tests for UserManager."""

    def test_create_user_normalizes_domain(self):
        user = User.objects.create_user(email='Owner@EXAMPLE.com', password='TestPass123!')

        assert user.email == 'Owner@example.com'
        assert not user.is_staff

    def test_create_superuser(self):
        admin_user = User.objects.create_superuser(email='admin@example.com', password='TestPass123!')

        assert admin_user.is_staff
        assert admin_user.is_superuser
        assert admin_user.check_password('TestPass123!')

    def test_email_required(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='TestPass123!')
