"""
Unit tests for the client package: storage, the session state machine,
error mapping, the local upload checks and the display helpers.
"""
import json

import pytest
import requests

from portfolio_client import (
    ApiClient,
    AuthError,
    BlogService,
    FileTokenStore,
    MemoryTokenStore,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    ProjectService,
    RateLimitError,
    ServerError,
    SessionState,
    SessionStatus,
    SkillService,
    UploadFile,
    UploadService,
    ValidationError,
    format_blog_for_display,
    format_contact_for_display,
    transition,
    validate_file,
)
from portfolio_client.api import error_from_response
from portfolio_client.blog import calculate_read_time, extract_excerpt, generate_slug
from portfolio_client.session import Loading, LoggedOut, LoginSucceeded, UserUpdated
from portfolio_client.upload import generate_thumbnail_url, optimize_image_url
from tests.conftest import FakeSession, make_response

MB = 1024 * 1024
USER = {'id': 'u1', 'name': 'Ada', 'email': 'ada@x.com', 'role': 'user'}
HOSTED_URL = 'https://res.cloudinary.com/demo/image/upload/v1/portfolio/a.png'


# =============================================================================
# TOKEN STORE
# =============================================================================

class TestTokenStore:

    def test_memory_store(self):
        store = MemoryTokenStore()
        assert store.get_token() is None
        assert store.get_user() is None

        store.set_token('abc')
        store.set_user(USER)

        assert store.get_token() == 'abc'
        assert store.get_user() == USER

        store.clear()
        assert store.get_token() is None
        assert store.get_user() is None

    def test_file_store_persists_between_instances(self, tmp_path):
        path = tmp_path / 'session' / 'credentials.json'
        FileTokenStore(path).set_token('abc')
        FileTokenStore(path).set_user(USER)

        store = FileTokenStore(path)
        assert store.get_token() == 'abc'
        assert store.get_user() == USER
        assert json.loads(path.read_text())['user'] == json.dumps(USER)

        store.clear()
        assert FileTokenStore(path).get_token() is None
        assert json.loads(path.read_text()) == {}

    @pytest.mark.parametrize('content', ['{"token": "abc", "us', '["abc"]'])
    def test_unreadable_file_store_is_empty(self, tmp_path, content):
        path = tmp_path / 'credentials.json'
        path.write_text(content)

        store = FileTokenStore(path)

        assert store.get_token() is None
        assert store.get_user() is None

        store.set_token('fresh')
        assert FileTokenStore(path).get_token() == 'fresh'

    def test_malformed_cached_user(self):
        store = MemoryTokenStore()
        store._write('user', '{not json')

        assert store.get_user() is None


# =============================================================================
# SESSION STATE MACHINE
# =============================================================================

class TestSessionTransitions:

    def test_initial_state_is_loading(self):
        state = SessionState()

        assert state.status == SessionStatus.LOADING
        assert state.is_loading
        assert not state.is_authenticated

    def test_login_succeeded(self):
        state = transition(SessionState(), LoginSucceeded(USER, 'abc'))

        assert state.status == SessionStatus.AUTHENTICATED
        assert state.is_authenticated
        assert state.user == USER
        assert state.token == 'abc'

    def test_login_without_token_is_not_authenticated(self):
        state = transition(SessionState(), LoginSucceeded(USER, ''))

        assert state.status == SessionStatus.UNAUTHENTICATED
        assert not state.is_authenticated

    @pytest.mark.parametrize('state', [
        SessionState(SessionStatus.LOADING),
        SessionState(SessionStatus.UNAUTHENTICATED),
        SessionState(SessionStatus.AUTHENTICATED, USER, 'abc'),
    ])
    def test_logout_from_any_state(self, state):
        new_state = transition(state, LoggedOut())

        assert new_state.status == SessionStatus.UNAUTHENTICATED
        assert new_state.user is None
        assert new_state.token is None

    def test_user_updated_keeps_token(self):
        state = SessionState(SessionStatus.AUTHENTICATED, USER, 'abc')
        updated = dict(USER, name='Ada L.')

        new_state = transition(state, UserUpdated(updated))

        assert new_state.status == SessionStatus.AUTHENTICATED
        assert new_state.user['name'] == 'Ada L.'
        assert new_state.token == 'abc'

    def test_user_updated_ignored_when_logged_out(self):
        state = SessionState(SessionStatus.UNAUTHENTICATED)

        assert transition(state, UserUpdated(USER)) is state

    def test_loading_clears_credentials(self):
        state = SessionState(SessionStatus.AUTHENTICATED, USER, 'abc')

        new_state = transition(state, Loading())

        assert new_state.is_loading
        assert not new_state.is_authenticated

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            transition(SessionState(), object())


# =============================================================================
# HTTP CLIENT
# =============================================================================

class TestErrorMapping:

    def test_validation_error_groups_fields(self):
        body = {
            'success': False,
            'message': 'Validation failed',
            'errors': [
                {'field': 'email', 'message': 'Enter a valid email address.'},
                {'field': 'email', 'message': 'User already exists with this email'},
                {'field': None, 'message': 'Passwords do not match'},
            ],
        }
        error = error_from_response(make_response(400, json.dumps(body).encode()))

        assert isinstance(error, ValidationError)
        assert error.message == 'Validation failed'
        assert error.field_errors == {
            'email': ['Enter a valid email address.', 'User already exists with this email'],
            'non_field_errors': ['Passwords do not match'],
        }

    @pytest.mark.parametrize('status_code, error_class', [
        (401, AuthError),
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (500, ServerError),
        (502, ServerError),
        (409, ServerError),
    ])
    def test_status_codes(self, status_code, error_class):
        error = error_from_response(make_response(status_code, b'{"success": false, "message": "nope"}'))

        assert isinstance(error, error_class)
        assert error.status_code == status_code
        assert error.message == 'nope'

    def test_rate_limit_reads_retry_after(self):
        error = error_from_response(make_response(429, b'{"success": false}', {'Retry-After': '120'}))

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 120
        assert error.message == 'Too many requests. Please try again later.'

    def test_non_json_error_body(self):
        error = error_from_response(make_response(503, b'<html>Service Unavailable</html>'))

        assert isinstance(error, ServerError)
        assert error.message == 'Server error. Please try again later.'


class TestApiClient:

    def make_client(self, notices, responses):
        store = MemoryTokenStore()
        fake = FakeSession(responses)
        client = ApiClient(
            base_url='http://api.test/api/',
            token_store=store,
            session=fake,
            notifier=lambda message, error: notices.append((message, error)),
        )
        return client, store, fake

    def test_sends_bearer_token(self, notices):
        client, store, fake = self.make_client(notices, [make_response(200, b'{"success": true}')])
        store.set_token('abc')

        assert client.get('/auth/me') == {'success': True}
        assert fake.calls[0]['url'] == 'http://api.test/api/auth/me'
        assert fake.calls[0]['headers']['Authorization'] == 'Bearer abc'
        assert fake.calls[0]['timeout'] == 30

    def test_no_token_no_header(self, notices):
        client, store, fake = self.make_client(notices, [make_response()])

        client.post('/contact', {'name': 'Ada'})

        assert 'Authorization' not in fake.calls[0]['headers']
        assert fake.calls[0]['json'] == {'name': 'Ada'}

    def test_network_error(self, notices):
        client, store, fake = self.make_client(notices, [requests.exceptions.ConnectionError('refused')])

        with pytest.raises(NetworkError):
            client.get('/health')

        assert notices[0][0] == 'Network error. Please check your internet connection.'

    def test_timeout_is_network_error(self, notices):
        client, store, fake = self.make_client(notices, [requests.exceptions.ReadTimeout()])

        with pytest.raises(NetworkError):
            client.get('/health')

    def test_expired_token_clears_store(self, notices):
        expired = []
        client, store, fake = self.make_client(notices, [make_response(401, b'{"success": false}')])
        client.on_unauthorized = lambda: expired.append(True)
        store.set_token('abc')
        store.set_user(USER)

        with pytest.raises(AuthError):
            client.get('/auth/me')

        assert store.get_token() is None
        assert store.get_user() is None
        assert expired == [True]
        assert notices[0][0] == 'Your session has expired. Please login again.'

    def test_anonymous_request_ignores_stored_token(self, notices):
        expired = []
        client, store, fake = self.make_client(notices, [
            make_response(401, b'{"success": false, "message": "Invalid credentials"}'),
        ])
        client.on_unauthorized = lambda: expired.append(True)
        store.set_token('abc')
        store.set_user(USER)

        with pytest.raises(AuthError):
            client.post('/auth/login', {'email': 'ada@x.com'}, anonymous=True)

        assert 'Authorization' not in fake.calls[0]['headers']
        assert store.get_token() == 'abc'
        assert expired == []
        assert notices[0][0] == 'Invalid credentials'

    def test_notifies_even_when_caller_handles_error(self, notices):
        client, store, fake = self.make_client(notices, [make_response(403, b'{"success": false}')])

        with pytest.raises(PermissionDeniedError):
            client.get('/contact')

        assert notices[0][0] == 'You do not have permission to perform this action.'
        assert len(fake.calls) == 1


# =============================================================================
# UPLOADS
# =============================================================================

class TestValidateFile:

    def test_exactly_max_size_is_accepted(self):
        file = UploadFile('a.png', b'\x00' * (10 * MB), 'image/png')

        assert validate_file(file, max_size=10) is file

    def test_just_over_max_size_is_rejected(self):
        file = UploadFile('a.png', b'\x00' * int(10.01 * MB), 'image/png')

        with pytest.raises(ValidationError) as excinfo:
            validate_file(file, max_size=10)

        assert excinfo.value.message == 'File size must be less than 10MB'

    def test_pdf_is_rejected(self):
        file = UploadFile('cv.pdf', b'%PDF-1.4', 'application/pdf')

        with pytest.raises(ValidationError) as excinfo:
            validate_file(file)

        assert 'application/pdf' in excinfo.value.message

    def test_content_type_guessed_from_name(self, tmp_path):
        path = tmp_path / 'photo.jpg'
        path.write_bytes(b'\xff\xd8\xff')

        file = UploadFile.from_path(path)

        assert file.content_type == 'image/jpeg'
        assert file.size == 3


class TestUploadServiceLocalChecks:

    def test_batch_with_oversize_file_sends_nothing(self, notices):
        fake = FakeSession()
        service = UploadService(ApiClient(token_store=MemoryTokenStore(), session=fake))
        files = [
            UploadFile('one.png', b'\x00' * 10, 'image/png'),
            UploadFile('two.png', b'\x00' * (11 * MB), 'image/png'),
            UploadFile('three.png', b'\x00' * 10, 'image/png'),
        ]

        with pytest.raises(ValidationError) as excinfo:
            service.upload_images(files)

        assert 'two.png' in excinfo.value.field_errors
        assert fake.calls == []

    def test_single_invalid_file_sends_nothing(self):
        fake = FakeSession()
        service = UploadService(ApiClient(token_store=MemoryTokenStore(), session=fake))

        with pytest.raises(ValidationError):
            service.upload_image(UploadFile('notes.txt', b'hello'))

        assert fake.calls == []


class TestUrlHelpers:

    def test_thumbnail_url(self):
        assert generate_thumbnail_url(HOSTED_URL) == (
            'https://res.cloudinary.com/demo/image/upload/w_300,h_200,c_fill,q_auto,f_auto/v1/portfolio/a.png'
        )

    def test_optimize_url(self):
        assert optimize_image_url(HOSTED_URL, width=800, quality='80') == (
            'https://res.cloudinary.com/demo/image/upload/w_800,q_80,f_auto/v1/portfolio/a.png'
        )

    @pytest.mark.parametrize('url', ['https://example.com/a.png', '', None])
    def test_other_urls_unchanged(self, url):
        assert generate_thumbnail_url(url) == url
        assert optimize_image_url(url, width=100) == url


# =============================================================================
# CONTACT DISPLAY
# =============================================================================

class TestFormatContact:

    def test_adds_colors_and_dates(self):
        contact = {
            'id': 'c1',
            'status': 'in-progress',
            'priority': 'urgent',
            'createdAt': '2024-03-05T14:30:00.123456Z',
        }

        formatted = format_contact_for_display(contact)

        assert formatted['statusColor'] == '#e67e22'
        assert formatted['priorityColor'] == '#e74c3c'
        assert formatted['formattedDate'] == '2024-03-05'
        assert formatted['formattedTime'] == '14:30:00'
        assert 'statusColor' not in contact

    def test_unknown_values_use_fallback_color(self):
        formatted = format_contact_for_display({'status': 'weird', 'priority': None})

        assert formatted['statusColor'] == '#95a5a6'
        assert formatted['priorityColor'] == '#95a5a6'
        assert formatted['formattedDate'] is None


# =============================================================================
# BLOG HELPERS
# =============================================================================

class TestBlogHelpers:

    @pytest.mark.parametrize('title, slug', [
        ('Hello, World!', 'hello-world'),
        ('  Django   REST -- tips ', 'django-rest-tips'),
        ('snake_case title', 'snake-case-title'),
        ('!!!', ''),
    ])
    def test_generate_slug(self, title, slug):
        assert generate_slug(title) == slug

    @pytest.mark.parametrize('words, minutes', [(0, 1), (200, 1), (201, 2), (600, 3)])
    def test_calculate_read_time(self, words, minutes):
        assert calculate_read_time(' '.join(['word'] * words)) == minutes

    def test_short_excerpt_is_plain_text(self):
        assert extract_excerpt('<p>Hello <b>there</b></p>') == 'Hello there'

    def test_long_excerpt_cut_at_word(self):
        excerpt = extract_excerpt('alpha beta gamma delta', max_length=13)

        assert excerpt == 'alpha beta...'

    def test_format_blog(self):
        blog = {
            'status': 'draft',
            'category': 'career',
            'createdAt': '2024-03-05T14:30:00Z',
            'publishedAt': None,
            'readTime': 4,
        }

        formatted = format_blog_for_display(blog)

        assert formatted['statusColor'] == '#f39c12'
        assert formatted['categoryColor'] == '#e67e22'
        assert formatted['formattedDate'] == '2024-03-05'
        assert formatted['readTimeText'] == '4 min read'
        assert 'statusColor' not in blog

    def test_format_blog_unknown_values(self):
        formatted = format_blog_for_display({'status': 'weird', 'category': 'poetry'})

        assert formatted['statusColor'] == '#95a5a6'
        assert formatted['categoryColor'] == '#95a5a6'
        assert formatted['formattedDate'] is None


class TestContentQueryParams:

    def test_project_filters_become_query_params(self):
        session = FakeSession([make_response(content=b'{"success": true, "projects": []}')])
        api = ApiClient(base_url='http://api.test', session=session, notifier=lambda *args: None)

        ProjectService(api).get_projects(page=2, category='web', featured=True, tech=['django', 'react'])

        assert session.calls[0]['params'] == {
            'page': 2,
            'category': 'web',
            'tech': 'django,react',
            'featured': 'true',
        }

    def test_reorder_sends_positions(self):
        session = FakeSession([make_response()])
        api = ApiClient(base_url='http://api.test', session=session, notifier=lambda *args: None)

        SkillService(api).reorder_skills(['s2', 's1'])

        assert session.calls[0]['method'] == 'PUT'
        assert session.calls[0]['json'] == {'skills': [
            {'id': 's2', 'order': 0},
            {'id': 's1', 'order': 1},
        ]}

    def test_blog_tags_joined(self):
        session = FakeSession([make_response(content=b'{"success": true, "blogs": []}')])
        api = ApiClient(base_url='http://api.test', session=session, notifier=lambda *args: None)

        BlogService(api).get_blogs(tags=['django', 'python'], sort='popular')

        assert session.calls[0]['params'] == {'tags': 'django,python', 'sort': 'popular'}
