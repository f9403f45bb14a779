"""
Tests for the Contact Management pipeline
"""
import uuid
import pytest
from datetime import timedelta
from django.core import mail
from django.utils import timezone
from rest_framework import status

from contact.models import ContactMessage, ContactReply, ContactFormRateLimit
from contact.rate_limiting import purge_expired_windows
from contact.tasks import cleanup_rate_limits


@pytest.fixture
def contact_data():
    return {
        'name': 'John Doe',
        'email': 'John@Example.com',
        'subject': 'Website redesign',
        'message': 'I would like a quote for redesigning my bakery website.',
        'projectType': 'web-development',
        'budget': '$1000-$5000',
        'timeline': '1-month',
        'phone': '+15551234567',
        'company': 'Doe Bakery',
    }


@pytest.fixture
def sample_contact_message(db):
    return ContactMessage.objects.create(
        name='John Doe',
        email='john@example.com',
        subject='Project inquiry',
        message='This is a test message about a new project.',
        ip_address='192.168.1.1'
    )


def make_contact(**overrides):
    fields = {
        'name': 'Someone',
        'email': 'someone@example.com',
        'subject': 'Hello there',
        'message': 'A message long enough to be valid.',
    }
    fields.update(overrides)
    return ContactMessage.objects.create(**fields)


@pytest.mark.django_db
class TestContactFormSubmission:
    """Test public contact form submission."""

    def test_submit_valid_contact_form(self, api_client, contact_data):
        response = api_client.post(
            '/api/contact', contact_data, format='json',
            HTTP_USER_AGENT='pytest-browser'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        contact_id = response.data['data']['contactId']
        assert contact_id

        message = ContactMessage.objects.get(id=contact_id)
        assert message.email == 'john@example.com'
        assert message.project_type == 'web-development'
        assert message.status == 'new'
        assert message.priority == 'medium'
        assert message.ip_address == '127.0.0.1'
        assert message.user_agent == 'pytest-browser'

    def test_submit_applies_defaults(self, api_client):
        response = api_client.post('/api/contact', {
            'name': 'Min Imal',
            'email': 'min@example.com',
            'subject': 'Quick hello',
            'message': 'Just saying hello to you.',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        message = ContactMessage.objects.get()
        assert message.project_type == 'other'
        assert message.budget == 'negotiable'
        assert message.timeline == 'flexible'
        assert message.source == 'website'

    def test_submit_notifies_owner(self, api_client, contact_data, settings):
        settings.CONTACT_EMAIL_TO = 'owner@portfolio.com'

        api_client.post('/api/contact', contact_data, format='json')

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['owner@portfolio.com']
        assert mail.outbox[0].subject == 'New Contact: Website redesign'
        assert mail.outbox[0].reply_to == ['john@example.com']

    def test_notification_failure_keeps_contact(self, api_client, contact_data, monkeypatch):
        class BrokenTask:
            def delay(self, *args, **kwargs):
                raise ConnectionError('SMTP down')

        monkeypatch.setattr('contact.views.send_staff_notification', BrokenTask())

        response = api_client.post('/api/contact', contact_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert ContactMessage.objects.count() == 1

    def test_submit_missing_required_fields(self, api_client):
        response = api_client.post('/api/contact', {'name': 'Test User'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        fields = {error['field'] for error in response.data['errors']}
        assert {'email', 'subject', 'message'} <= fields

    @pytest.mark.parametrize('field,value', [
        ('email', 'invalid-email'),
        ('name', 'J'),
        ('subject', 'Hey'),
        ('message', 'Too short'),
        ('message', 'x' * 1001),
        ('phone', '0123'),
        ('projectType', 'landscaping'),
        ('budget', 'a lot'),
    ])
    def test_submit_invalid_field(self, api_client, contact_data, field, value):
        contact_data[field] = value

        response = api_client.post('/api/contact', contact_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in [error['field'] for error in response.data['errors']]
        assert ContactMessage.objects.count() == 0

    def test_script_tags_are_stripped(self, api_client, contact_data):
        contact_data['message'] = 'Hello <script>alert("x")</script>I need a website built.'

        response = api_client.post('/api/contact', contact_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        message = ContactMessage.objects.get()
        assert '<script>' not in message.message
        assert message.message == 'Hello I need a website built.'

    def test_submit_ignores_stale_token(self, api_client, contact_data):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer expired-token')

        response = api_client.post('/api/contact', contact_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestRateLimiting:
    """Test contact form rate limiting."""

    def test_rate_limit_per_ip(self, api_client, contact_data, settings):
        settings.CONTACT_FORM_RATE_LIMIT_PER_HOUR = 2

        for index in range(2):
            contact_data['email'] = f'sender{index}@example.com'
            response = api_client.post('/api/contact', contact_data, format='json')
            assert response.status_code == status.HTTP_201_CREATED

        contact_data['email'] = 'another@example.com'
        response = api_client.post('/api/contact', contact_data, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data['success'] is False
        assert int(response['Retry-After']) > 0
        assert ContactMessage.objects.count() == 2

    def test_rate_limit_per_email(self, api_client, contact_data, settings):
        settings.CONTACT_FORM_RATE_LIMIT_PER_DAY = 1

        first = api_client.post('/api/contact', contact_data, format='json', REMOTE_ADDR='10.0.0.1')
        second = api_client.post('/api/contact', contact_data, format='json', REMOTE_ADDR='10.0.0.2')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_forwarded_header_ignored_without_trusted_proxy(self, api_client, contact_data):
        response = api_client.post(
            '/api/contact', contact_data, format='json',
            HTTP_X_FORWARDED_FOR='9.9.9.9', REMOTE_ADDR='10.0.0.5'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert ContactMessage.objects.get().ip_address == '10.0.0.5'
        assert ContactFormRateLimit.objects.filter(identifier='10.0.0.5', identifier_type='ip').exists()

    def test_forwarded_header_used_behind_trusted_proxy(self, api_client, contact_data, settings):
        settings.TRUST_X_FORWARDED_FOR = True

        api_client.post(
            '/api/contact', contact_data, format='json',
            HTTP_X_FORWARDED_FOR='9.9.9.9, 10.0.0.1', REMOTE_ADDR='10.0.0.5'
        )

        assert ContactMessage.objects.get().ip_address == '9.9.9.9'

    def test_malformed_forwarded_header_falls_back(self, api_client, contact_data, settings):
        settings.TRUST_X_FORWARDED_FOR = True

        response = api_client.post(
            '/api/contact', contact_data, format='json',
            HTTP_X_FORWARDED_FOR='unknown', REMOTE_ADDR='10.0.0.5'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert ContactMessage.objects.get().ip_address == '10.0.0.5'

    def test_failed_submissions_do_not_count(self, api_client, settings):
        settings.CONTACT_FORM_RATE_LIMIT_PER_HOUR = 1

        api_client.post('/api/contact', {'name': 'x'}, format='json')

        assert not ContactFormRateLimit.objects.filter(identifier_type='ip').exists()

    def test_cleanup_rate_limits(self):
        ContactFormRateLimit.objects.create(
            identifier='1.1.1.1', identifier_type='ip', count=5,
            window_start=timezone.now() - timedelta(days=2)
        )
        ContactFormRateLimit.objects.create(
            identifier='2.2.2.2', identifier_type='ip', count=1,
            window_start=timezone.now()
        )

        assert cleanup_rate_limits() == 1
        assert purge_expired_windows() == 0
        assert list(ContactFormRateLimit.objects.values_list('identifier', flat=True)) == ['2.2.2.2']


@pytest.mark.django_db
class TestContactMessageList:
    """Test admin contact message listing."""

    def test_list_requires_authentication(self, api_client):
        response = api_client.get('/api/contact')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_forbidden_for_regular_user(self, user_client):
        response = user_client.get('/api/contact')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_messages(self, admin_client, sample_contact_message):
        response = admin_client.get('/api/contact')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert len(response.data['contacts']) == 1
        assert response.data['contacts'][0]['id'] == str(sample_contact_message.id)
        assert response.data['pagination'] == {'page': 1, 'limit': 20, 'total': 1, 'pages': 1}
        assert response.data['stats'] == {'new': 1}

    def test_list_newest_first(self, admin_client):
        older = make_contact(subject='Older one')
        newer = make_contact(subject='Newer one')
        ContactMessage.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=1))

        response = admin_client.get('/api/contact')

        assert [c['id'] for c in response.data['contacts']] == [str(newer.id), str(older.id)]

    def test_filter_by_status(self, admin_client):
        make_contact(status='new')
        make_contact(status='replied')

        response = admin_client.get('/api/contact', {'status': 'replied'})
        assert [c['status'] for c in response.data['contacts']] == ['replied']

        response = admin_client.get('/api/contact', {'status': 'all'})
        assert len(response.data['contacts']) == 2

    def test_filter_by_priority_and_project_type(self, admin_client):
        make_contact(priority='urgent', project_type='mobile-app')
        make_contact(priority='urgent', project_type='consultation')
        make_contact(priority='low', project_type='mobile-app')

        response = admin_client.get('/api/contact', {'priority': 'urgent', 'projectType': 'mobile-app'})

        assert len(response.data['contacts']) == 1

    def test_invalid_status_filter_rejected(self, admin_client):
        response = admin_client.get('/api/contact', {'status': 'bogus'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_search(self, admin_client):
        make_contact(name='Alice', subject='Logo design')
        make_contact(name='Bob', message='Need a MOBILE app for my shop.')

        response = admin_client.get('/api/contact', {'search': 'mobile'})
        assert [c['name'] for c in response.data['contacts']] == ['Bob']

        response = admin_client.get('/api/contact', {'search': 'logo'})
        assert [c['name'] for c in response.data['contacts']] == ['Alice']

    def test_spam_hidden_unless_requested(self, admin_client):
        make_contact(name='Legit')
        make_contact(name='Spammer', is_spam=True, status='archived')

        response = admin_client.get('/api/contact')
        assert [c['name'] for c in response.data['contacts']] == ['Legit']
        assert response.data['stats'] == {'new': 1}

        response = admin_client.get('/api/contact', {'includeSpam': 'true'})
        assert len(response.data['contacts']) == 2

    def test_pagination(self, admin_client):
        for index in range(5):
            make_contact(subject=f'Subject number {index}')

        response = admin_client.get('/api/contact', {'page': 2, 'limit': 2})

        assert len(response.data['contacts']) == 2
        assert response.data['pagination'] == {'page': 2, 'limit': 2, 'total': 5, 'pages': 3}


@pytest.mark.django_db
class TestContactMessageDetail:
    """Test single contact operations."""

    def test_view_marks_new_as_read(self, admin_client, sample_contact_message):
        response = admin_client.get(f'/api/contact/{sample_contact_message.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['status'] == 'read'
        sample_contact_message.refresh_from_db()
        assert sample_contact_message.status == 'read'

    def test_view_keeps_other_statuses(self, admin_client):
        message = make_contact(status='replied')

        response = admin_client.get(f'/api/contact/{message.id}')

        assert response.data['data']['status'] == 'replied'

    def test_unknown_id_returns_404(self, admin_client):
        response = admin_client.get(f'/api/contact/{uuid.uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'success': False, 'message': 'Contact not found'}

    def test_detail_forbidden_for_regular_user(self, user_client, sample_contact_message):
        response = user_client.get(f'/api/contact/{sample_contact_message.id}')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_status(self, admin_client, sample_contact_message):
        response = admin_client.put(f'/api/contact/{sample_contact_message.id}/status', {
            'status': 'in-progress',
            'priority': 'high',
            'notes': 'Call back on Monday',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['status'] == 'in-progress'
        assert response.data['data']['priority'] == 'high'
        assert response.data['data']['notes'] == 'Call back on Monday'

    def test_partial_update_keeps_other_fields(self, admin_client, sample_contact_message):
        response = admin_client.put(
            f'/api/contact/{sample_contact_message.id}/status',
            {'priority': 'urgent'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        sample_contact_message.refresh_from_db()
        assert sample_contact_message.priority == 'urgent'
        assert sample_contact_message.status == 'new'

    def test_update_rejects_unknown_status(self, admin_client, sample_contact_message):
        response = admin_client.put(
            f'/api/contact/{sample_contact_message.id}/status',
            {'status': 'resolved'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'status'

    def test_delete_is_permanent(self, admin_client, sample_contact_message):
        response = admin_client.delete(f'/api/contact/{sample_contact_message.id}')

        assert response.status_code == status.HTTP_200_OK
        assert not ContactMessage.objects.filter(id=sample_contact_message.id).exists()

        response = admin_client.delete(f'/api/contact/{sample_contact_message.id}')
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestContactReply:
    """Test replying to contact messages."""

    def test_reply_sends_email_and_records_reply(self, admin_client, site_admin, sample_contact_message):
        response = admin_client.post(
            f'/api/contact/{sample_contact_message.id}/reply',
            {'message': 'Thanks, I will send a quote tomorrow.'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['john@example.com']
        assert mail.outbox[0].subject == 'Re: Project inquiry'
        assert 'Thanks, I will send a quote tomorrow.' in mail.outbox[0].body
        assert sample_contact_message.message in mail.outbox[0].body

        sample_contact_message.refresh_from_db()
        assert sample_contact_message.status == 'replied'
        assert sample_contact_message.replied_at is not None

        reply = ContactReply.objects.get()
        assert reply.sent_by == site_admin
        assert reply.contact == sample_contact_message

    def test_reply_requires_message(self, admin_client, sample_contact_message):
        response = admin_client.post(
            f'/api/contact/{sample_contact_message.id}/reply',
            {'message': ''},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert len(mail.outbox) == 0

    def test_email_failure_leaves_contact_unchanged(self, admin_client, sample_contact_message, monkeypatch):
        def broken_send(*args, **kwargs):
            raise ConnectionRefusedError('SMTP unavailable')

        monkeypatch.setattr('contact.views.send_reply_email', broken_send)

        response = admin_client.post(
            f'/api/contact/{sample_contact_message.id}/reply',
            {'message': 'This will never arrive.'},
            format='json'
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['success'] is False
        sample_contact_message.refresh_from_db()
        assert sample_contact_message.status == 'new'
        assert sample_contact_message.replied_at is None
        assert ContactReply.objects.count() == 0

    def test_replies_are_listed_on_contact(self, admin_client, sample_contact_message):
        admin_client.post(
            f'/api/contact/{sample_contact_message.id}/reply',
            {'message': 'First answer.'},
            format='json'
        )

        response = admin_client.get(f'/api/contact/{sample_contact_message.id}')

        replies = response.data['data']['replies']
        assert len(replies) == 1
        assert replies[0]['message'] == 'First answer.'
        assert replies[0]['sentByName'] == 'Site Owner'


@pytest.mark.django_db
class TestSpamAndStats:
    """Test spam flagging and statistics."""

    def test_mark_as_spam_is_idempotent(self, admin_client, sample_contact_message):
        url = f'/api/contact/{sample_contact_message.id}/spam'

        first = admin_client.put(url)
        sample_contact_message.refresh_from_db()
        after_first = (sample_contact_message.status, sample_contact_message.is_spam)

        second = admin_client.put(url)
        sample_contact_message.refresh_from_db()

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_200_OK
        assert after_first == ('archived', True)
        assert (sample_contact_message.status, sample_contact_message.is_spam) == after_first

    def test_mark_unknown_as_spam(self, admin_client):
        response = admin_client.put(f'/api/contact/{uuid.uuid4()}/spam')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_stats(self, admin_client):
        make_contact(status='new', priority='high', project_type='mobile-app')
        make_contact(status='new', priority='low')
        make_contact(status='replied')
        make_contact(is_spam=True, status='archived')

        response = admin_client.get('/api/contact/stats')

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['total'] == 3
        assert data['byStatus'] == {'new': 2, 'replied': 1}
        assert data['byPriority'] == {'high': 1, 'low': 1, 'medium': 1}
        assert data['byProjectType'] == {'mobile-app': 1, 'other': 2}
        assert data['spam'] == 1
        assert len(data['recent']) == 3

    def test_stats_forbidden_for_regular_user(self, user_client):
        response = user_client.get('/api/contact/stats')

        assert response.status_code == status.HTTP_403_FORBIDDEN
