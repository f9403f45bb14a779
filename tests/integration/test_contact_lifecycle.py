"""
Contact lifecycle through the client: public submission, admin triage,
reply, spam and deletion.

Run with: pytest tests/integration/test_contact_lifecycle.py -v
"""
import uuid

import pytest
from django.core import mail

from portfolio_client import (
    AuthService,
    ContactService,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ValidationError,
    format_contact_for_display,
)

SCENARIO = {
    'name': 'Ada',
    'email': 'ada@x.com',
    'subject': 'Hello there',
    'message': 'This is a test message.',
}


@pytest.fixture
def contact_id(public_contacts):
    return public_contacts.submit_contact(SCENARIO)['data']['contactId']


@pytest.mark.django_db
class TestSubmission:

    def test_submit_scenario(self, public_contacts):
        response = public_contacts.submit_contact(SCENARIO)

        assert response['success'] is True
        assert isinstance(response['data']['contactId'], str)
        assert response['data']['contactId']

    def test_submission_notifies_owner(self, public_contacts):
        public_contacts.submit_contact(SCENARIO)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == 'New Contact: Hello there'

    def test_submit_then_list_round_trip(self, public_contacts, admin_contacts):
        public_contacts.submit_contact(SCENARIO)

        response = admin_contacts.get_contacts()

        listed = [
            {key: contact[key] for key in ('name', 'email', 'subject', 'message')}
            for contact in response['contacts']
        ]
        assert SCENARIO in listed
        assert response['stats'] == {'new': 1}
        assert response['pagination']['total'] == 1

    def test_submit_invalid(self, public_contacts, notices):
        with pytest.raises(ValidationError) as excinfo:
            public_contacts.submit_contact(dict(SCENARIO, email='nope', subject='Hi'))

        assert set(excinfo.value.field_errors) >= {'email', 'subject'}
        assert notices

    def test_rate_limit(self, public_contacts, settings):
        settings.CONTACT_FORM_RATE_LIMIT_PER_HOUR = 2
        public_contacts.submit_contact(SCENARIO)
        public_contacts.submit_contact(dict(SCENARIO, email='grace@x.com'))

        with pytest.raises(RateLimitError) as excinfo:
            public_contacts.submit_contact(dict(SCENARIO, email='linus@x.com'))

        assert excinfo.value.status_code == 429
        assert excinfo.value.retry_after >= 1

    def test_listing_requires_admin(self, make_api, regular_user):
        api = make_api()
        AuthService(api).login(regular_user.email, 'Password123')

        with pytest.raises(PermissionDeniedError):
            ContactService(api).get_contacts()


@pytest.mark.django_db
class TestAdminTriage:

    def test_filters_are_sent_as_query_string(self, public_contacts, admin_contacts):
        public_contacts.submit_contact(dict(SCENARIO, projectType='mobile-app'))
        public_contacts.submit_contact(dict(SCENARIO, email='grace@x.com', projectType='consultation'))

        response = admin_contacts.get_contacts(project_type='mobile-app', search='ada', limit=5)

        assert [contact['email'] for contact in response['contacts']] == ['ada@x.com']
        assert response['pagination']['limit'] == 5

    def test_view_marks_read(self, admin_contacts, contact_id):
        contact = admin_contacts.get_contact(contact_id)['data']

        assert contact['status'] == 'read'
        assert format_contact_for_display(contact)['statusColor'] == '#3498db'

    def test_update_status(self, admin_contacts, contact_id):
        response = admin_contacts.update_contact_status(contact_id, status='in-progress', priority='high')

        assert response['data']['status'] == 'in-progress'
        assert response['data']['priority'] == 'high'

    def test_update_status_rejects_unknown_value(self, admin_contacts, contact_id):
        with pytest.raises(ValidationError) as excinfo:
            admin_contacts.update_contact_status(contact_id, status='whatever')

        assert 'status' in excinfo.value.field_errors

    def test_reply(self, admin_contacts, contact_id):
        mail.outbox.clear()

        response = admin_contacts.reply_to_contact(contact_id, 'Thanks, talk soon!')

        assert response['success'] is True
        assert mail.outbox[0].to == ['ada@x.com']
        contact = admin_contacts.get_contact(contact_id)['data']
        assert contact['status'] == 'replied'
        assert contact['replies'][0]['message'] == 'Thanks, talk soon!'

    def test_mark_as_spam_twice(self, admin_contacts, contact_id):
        admin_contacts.mark_as_spam(contact_id)
        first = admin_contacts.get_contact(contact_id)['data']

        second_response = admin_contacts.mark_as_spam(contact_id)
        second = admin_contacts.get_contact(contact_id)['data']

        assert second_response['success'] is True
        assert (second['status'], second['isSpam']) == (first['status'], first['isSpam']) == ('archived', True)
        assert admin_contacts.get_contacts()['contacts'] == []
        assert len(admin_contacts.get_contacts(include_spam=True)['contacts']) == 1

    def test_delete(self, admin_contacts, contact_id):
        admin_contacts.delete_contact(contact_id)

        with pytest.raises(NotFoundError):
            admin_contacts.get_contact(contact_id)

    def test_unknown_contact(self, admin_contacts, notices):
        with pytest.raises(NotFoundError):
            admin_contacts.mark_as_spam(str(uuid.uuid4()))

        assert notices[-1][0] == 'The requested resource was not found.'

    def test_stats(self, admin_contacts, contact_id):
        stats = admin_contacts.get_stats()['data']

        assert stats['total'] == 1
        assert stats['byStatus'] == {'new': 1}
        assert stats['recent'][0]['id'] == contact_id
