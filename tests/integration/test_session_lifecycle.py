"""
Session lifecycle against the real API: register, login, profile, logout.

Run with: pytest tests/integration/test_session_lifecycle.py -v
"""
import pytest

from portfolio_client import (
    AuthError,
    AuthService,
    FileTokenStore,
    MemoryTokenStore,
    Session,
    SessionStatus,
    ValidationError,
)


@pytest.mark.django_db
class TestRegisterAndLogin:

    def test_register_then_login_with_same_pair(self, make_api):
        Session(AuthService(make_api())).register('Ada Lovelace', 'ada@x.com', 'Analytical1')

        session = Session(AuthService(make_api()))
        state = session.login('ada@x.com', 'Analytical1')

        assert state.status == SessionStatus.AUTHENTICATED
        assert state.is_authenticated
        assert state.user['email'] == 'ada@x.com'
        assert state.token

    def test_register_authenticates_and_persists(self, session, auth):
        state = session.register('Ada Lovelace', 'ada@x.com', 'Analytical1')

        assert state.is_authenticated
        assert auth.get_token() == state.token
        assert auth.get_current_user()['email'] == 'ada@x.com'
        assert not session.is_admin()

    def test_register_validation_errors(self, session, regular_user, notices):
        with pytest.raises(ValidationError) as excinfo:
            session.register('Jane Again', regular_user.email, 'weak')

        assert 'email' in excinfo.value.field_errors
        assert 'password' in excinfo.value.field_errors
        assert session.state.status == SessionStatus.UNAUTHENTICATED
        assert notices

    def test_bad_login_raises_auth_error(self, session, auth, notices):
        with pytest.raises(AuthError) as excinfo:
            session.login('bad@x.com', 'wrong')

        assert excinfo.value.message == 'Invalid credentials'
        assert session.state.status == SessionStatus.UNAUTHENTICATED
        assert not session.state.is_authenticated
        assert auth.get_token() is None
        assert notices[-1][0] == 'Invalid credentials'

    def test_wrong_password_while_logged_in_keeps_session(self, session, auth, regular_user, notices):
        session.login(regular_user.email, 'Password123')
        token = session.state.token

        with pytest.raises(AuthError):
            session.login(regular_user.email, 'WrongPass1')

        assert session.state.status == SessionStatus.AUTHENTICATED
        assert session.state.token == token
        assert auth.get_token() == token
        assert notices[-1][0] == 'Invalid credentials'

    def test_invalid_relogin_leaves_store_and_state_in_step(self, session, auth, regular_user):
        session.login(regular_user.email, 'Password123')

        with pytest.raises(ValidationError):
            session.login('not-an-email', 'x')

        assert session.state.is_authenticated
        assert auth.is_authenticated()
        assert session.state.token == auth.get_token()

    def test_admin_login(self, session, site_admin):
        session.login(site_admin.email, 'Password123')

        assert session.is_admin()

    def test_subscribers_see_each_change(self, session, regular_user):
        seen = []
        unsubscribe = session.subscribe(lambda state: seen.append(state.status))

        session.login(regular_user.email, 'Password123')
        unsubscribe()
        session.logout()

        assert seen == [SessionStatus.AUTHENTICATED]


@pytest.mark.django_db
class TestCheckAuth:

    def test_logout_then_check_auth_is_unauthenticated(self, session, regular_user):
        session.login(regular_user.email, 'Password123')

        session.logout()
        state = session.check_auth()

        assert state.status == SessionStatus.UNAUTHENTICATED
        assert not state.is_authenticated

    def test_logout_calls_hook_without_request(self, make_api, regular_user):
        left = []
        api = make_api()
        auth = AuthService(api, on_logout=lambda: left.append(True))
        session = Session(auth)
        session.login(regular_user.email, 'Password123')
        api.session = None

        session.logout()

        assert left == [True]
        assert auth.get_token() is None

    def test_check_auth_restores_stored_session(self, make_api, regular_user):
        store = MemoryTokenStore()
        Session(AuthService(make_api(store))).login(regular_user.email, 'Password123')

        session = Session(AuthService(make_api(store)))
        assert session.state.is_loading

        state = session.check_auth()

        assert state.status == SessionStatus.AUTHENTICATED
        assert state.user['id'] == str(regular_user.id)

    def test_check_auth_with_rejected_token_clears_store(self, make_api, regular_user):
        store = MemoryTokenStore()
        store.set_token('not-a-real-token')
        store.set_user({'email': regular_user.email, 'role': 'user'})

        state = Session(AuthService(make_api(store))).check_auth()

        assert state.status == SessionStatus.UNAUTHENTICATED
        assert store.get_token() is None
        assert store.get_user() is None

    def test_check_auth_without_cached_user(self, make_api, regular_user):
        store = MemoryTokenStore()
        Session(AuthService(make_api(store))).login(regular_user.email, 'Password123')
        store._remove('user')

        state = Session(AuthService(make_api(store))).check_auth()

        assert state.status == SessionStatus.UNAUTHENTICATED

    def test_check_auth_with_corrupt_credentials_file(self, make_api, regular_user, tmp_path):
        path = tmp_path / 'credentials.json'
        path.write_text('{"token": "abc", "us')

        state = Session(AuthService(make_api(FileTokenStore(path)))).check_auth()

        assert state.status == SessionStatus.UNAUTHENTICATED

    def test_deactivated_user_is_logged_out_downstream(self, session, auth, regular_user, notices):
        session.login(regular_user.email, 'Password123')
        regular_user.is_active = False
        regular_user.save()

        with pytest.raises(AuthError):
            auth.get_profile()

        assert session.state.status == SessionStatus.UNAUTHENTICATED
        assert auth.get_token() is None
        assert notices[-1][0] == 'Your session has expired. Please login again.'


@pytest.mark.django_db
class TestProfile:

    def test_update_profile_keeps_session(self, session, auth, regular_user):
        session.login(regular_user.email, 'Password123')
        token = session.state.token

        state = session.update_profile({'name': 'Jane Renamed', 'bio': 'Hello'})

        assert state.status == SessionStatus.AUTHENTICATED
        assert state.token == token
        assert state.user['name'] == 'Jane Renamed'
        assert auth.get_current_user()['bio'] == 'Hello'

    def test_change_password(self, session, auth, regular_user, make_api):
        session.login(regular_user.email, 'Password123')

        response = auth.change_password('Password123', 'Changed4567')

        assert response['success'] is True
        assert AuthService(make_api()).login(regular_user.email, 'Changed4567')['token']

    def test_admin_lists_users(self, admin_api, regular_user):
        response = AuthService(admin_api).get_users(search='jane')

        assert [user['email'] for user in response['data']] == [regular_user.email]
        assert response['pagination']['total'] == 1
