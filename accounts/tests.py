"""
Tests for registration, login and the account endpoints.
"""
import pytest
from io import StringIO
from django.contrib.auth import get_user_model
from django.core import mail
from django.core.exceptions import ValidationError
from django.core.management import call_command
from rest_framework import status

from accounts.services import ensure_default_admin
from accounts.validators import MixedCharacterPasswordValidator, strip_script_tags

User = get_user_model()


@pytest.fixture
def registration_data():
    return {
        'name': 'Ada Lovelace',
        'email': 'Ada@Example.com',
        'password': 'Analytical1',
        'confirmPassword': 'Analytical1',
    }


@pytest.mark.django_db
class TestRegistration:
    """Test POST /api/auth/register."""

    def test_register_returns_token_and_user(self, api_client, registration_data):
        response = api_client.post('/api/auth/register', registration_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['token']
        assert response.data['user']['email'] == 'ada@example.com'
        assert response.data['user']['role'] == 'user'
        assert 'password' not in response.data['user']

    def test_register_sends_welcome_email(self, api_client, registration_data):
        api_client.post('/api/auth/register', registration_data, format='json')

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['ada@example.com']
        assert 'Welcome' in mail.outbox[0].subject

    def test_register_password_mismatch(self, api_client, registration_data):
        registration_data['confirmPassword'] = 'Different1'

        response = api_client.post('/api/auth/register', registration_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        fields = [error['field'] for error in response.data['errors']]
        assert 'confirmPassword' in fields

    @pytest.mark.parametrize('password', ['short', 'alllowercase1', 'ALLUPPERCASE1', 'NoDigitsHere'])
    def test_register_rejects_weak_passwords(self, api_client, registration_data, password):
        registration_data['password'] = password
        registration_data['confirmPassword'] = password

        response = api_client.post('/api/auth/register', registration_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = [error['field'] for error in response.data['errors']]
        assert 'password' in fields
        assert not User.objects.filter(email='ada@example.com').exists()

    def test_register_duplicate_email(self, api_client, registration_data, regular_user):
        registration_data['email'] = regular_user.email.upper()

        response = api_client.post('/api/auth/register', registration_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'email'

    def test_register_ignores_stale_token(self, api_client, registration_data):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')

        response = api_client.post('/api/auth/register', registration_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestLogin:
    """Test POST /api/auth/login."""

    def test_login_success(self, api_client, regular_user):
        response = api_client.post('/api/auth/login', {
            'email': 'jane@example.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['token']
        assert response.data['user']['id'] == str(regular_user.id)

        regular_user.refresh_from_db()
        assert regular_user.last_login_at is not None

    def test_login_email_is_case_insensitive(self, api_client, regular_user):
        response = api_client.post('/api/auth/login', {
            'email': 'JANE@example.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, regular_user):
        response = api_client.post('/api/auth/login', {
            'email': 'jane@example.com',
            'password': 'WrongPassword1',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'success': False, 'message': 'Invalid credentials'}

    def test_login_unknown_email(self, api_client):
        response = api_client.post('/api/auth/login', {
            'email': 'nobody@example.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['message'] == 'Invalid credentials'

    def test_login_deactivated_account(self, api_client, regular_user):
        regular_user.is_active = False
        regular_user.save()

        response = api_client.post('/api/auth/login', {
            'email': 'jane@example.com',
            'password': 'Password123',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_malformed_input(self, api_client):
        response = api_client.post('/api/auth/login', {'email': 'not-an-email'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Validation failed'


@pytest.mark.django_db
class TestCurrentUser:
    """Test GET /api/auth/me."""

    def test_me_requires_token(self, api_client):
        response = api_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_me_rejects_invalid_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer garbage')

        response = api_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_user(self, user_client, regular_user):
        response = user_client.get('/api/auth/me')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['email'] == regular_user.email
        assert response.data['data']['name'] == 'Jane Visitor'


@pytest.mark.django_db
class TestProfile:
    """Test PUT /api/auth/profile and POST /api/auth/change-password."""

    def test_update_profile(self, user_client, regular_user):
        response = user_client.put('/api/auth/profile', {
            'name': 'Jane Updated',
            'bio': 'Writes <script>alert(1)</script>code',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['name'] == 'Jane Updated'
        assert response.data['data']['bio'] == 'Writes code'

    def test_update_profile_cannot_change_role(self, user_client, regular_user):
        response = user_client.put('/api/auth/profile', {'role': 'admin'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        regular_user.refresh_from_db()
        assert regular_user.role == 'user'

    def test_update_profile_email_taken(self, user_client, site_admin):
        response = user_client.put('/api/auth/profile', {'email': site_admin.email}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_change_password(self, user_client, api_client, regular_user):
        response = user_client.post('/api/auth/change-password', {
            'currentPassword': 'Password123',
            'newPassword': 'NewPassword456',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK

        login = api_client.post('/api/auth/login', {
            'email': regular_user.email,
            'password': 'NewPassword456',
        }, format='json')
        assert login.status_code == status.HTTP_200_OK

    def test_change_password_wrong_current(self, user_client):
        response = user_client.post('/api/auth/change-password', {
            'currentPassword': 'Nope12345',
            'newPassword': 'NewPassword456',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'currentPassword'


@pytest.mark.django_db
class TestUserList:
    """Test GET /api/auth/users."""

    def test_admin_lists_users(self, admin_client, regular_user, site_admin):
        response = admin_client.get('/api/auth/users')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['pagination']['total'] == 2
        assert len(response.data['data']) == 2

    def test_admin_searches_users(self, admin_client, regular_user):
        response = admin_client.get('/api/auth/users', {'search': 'jane'})

        assert [user['email'] for user in response.data['data']] == ['jane@example.com']

    def test_non_admin_forbidden(self, user_client):
        response = user_client.get('/api/auth/users')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['success'] is False


@pytest.mark.django_db
class TestAdminBootstrap:
    """Test the first-run admin account."""

    def test_creates_admin_once(self, settings):
        settings.ADMIN_EMAIL = 'Boss@Portfolio.com'
        settings.ADMIN_PASSWORD = 'Admin123456'

        user, created = ensure_default_admin()
        again, created_again = ensure_default_admin()

        assert created is True
        assert created_again is False
        assert again.pk == user.pk
        assert user.email == 'boss@portfolio.com'
        assert user.role == 'admin'
        assert user.check_password('Admin123456')
        assert User.objects.filter(email='boss@portfolio.com').count() == 1

    def test_existing_account_is_untouched(self, regular_user, settings):
        settings.ADMIN_EMAIL = regular_user.email

        user, created = ensure_default_admin()

        assert created is False
        user.refresh_from_db()
        assert user.role == 'user'

    def test_management_command(self):
        out = StringIO()
        call_command('create_default_admin', '--email', 'cmd@portfolio.com', '--password', 'Secret123', stdout=out)

        assert 'Created admin user' in out.getvalue()
        assert User.objects.get(email='cmd@portfolio.com').role == 'admin'


class TestValidators:
    """Test password and input sanitizing helpers."""

    def test_mixed_character_password(self):
        validator = MixedCharacterPasswordValidator()
        validator.validate('Password1')

        with pytest.raises(ValidationError):
            validator.validate('password1')

    def test_strip_script_tags(self):
        assert strip_script_tags('Hi <script>steal()</script>there') == 'Hi there'
        assert strip_script_tags('<SCRIPT type="text/javascript">x</SCRIPT>ok') == 'ok'
        assert strip_script_tags(None) is None
