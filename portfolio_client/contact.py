"""
Contact service and the lookup tables used to render contacts.
"""

from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from .api import ApiClient

STATUSES = ['new', 'read', 'replied', 'in-progress', 'completed', 'archived']
PRIORITIES = ['low', 'medium', 'high', 'urgent']
PROJECT_TYPES = ['web-development', 'mobile-app', 'consultation', 'collaboration', 'other']
BUDGET_RANGES = ['<$1000', '$1000-$5000', '$5000-$10000', '$10000+', 'negotiable']
TIMELINE_OPTIONS = ['asap', '1-month', '2-3 months', '3-6 months', 'flexible']
SOURCE_OPTIONS = ['website', 'linkedin', 'email', 'referral', 'other']

DEFAULT_COLOR = '#95a5a6'

STATUS_COLORS = {
    'new': '#f39c12',
    'read': '#3498db',
    'replied': '#27ae60',
    'in-progress': '#e67e22',
    'completed': '#2ecc71',
    'archived': '#95a5a6',
}

PRIORITY_COLORS = {
    'low': '#95a5a6',
    'medium': '#f39c12',
    'high': '#e67e22',
    'urgent': '#e74c3c',
}


def get_status_color(status: Optional[str]) -> str:
    return STATUS_COLORS.get(status, DEFAULT_COLOR)


def get_priority_color(priority: Optional[str]) -> str:
    return PRIORITY_COLORS.get(priority, DEFAULT_COLOR)


def format_contact_for_display(contact: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``contact`` with colors and a formatted creation date and time."""
    formatted = dict(contact)
    formatted['statusColor'] = get_status_color(contact.get('status'))
    formatted['priorityColor'] = get_priority_color(contact.get('priority'))

    created_at = contact.get('createdAt')
    if created_at:
        created = date_parser.isoparse(created_at)
        formatted['formattedDate'] = created.strftime('%Y-%m-%d')
        formatted['formattedTime'] = created.strftime('%H:%M:%S')
    else:
        formatted['formattedDate'] = formatted['formattedTime'] = None
    return formatted


class ContactService:
    """
    Calls against ``/contact``.

    Every method is a single request; results are returned as the server
    sent them.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    def submit_contact(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Public. Returns ``{success, message, data: {contactId}}``."""
        return self.api.post('/contact', data)

    def get_contacts(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        project_type: Optional[str] = None,
        search: Optional[str] = None,
        include_spam: bool = False,
    ) -> Dict[str, Any]:
        """Admin only. Returns ``{success, contacts, pagination, stats}``."""
        params = {}
        if page:
            params['page'] = page
        if limit:
            params['limit'] = limit
        if status:
            params['status'] = status
        if priority:
            params['priority'] = priority
        if project_type:
            params['projectType'] = project_type
        if search:
            params['search'] = search
        if include_spam:
            params['includeSpam'] = 'true'
        return self.api.get('/contact', params=params)

    def get_contact(self, contact_id: str) -> Dict[str, Any]:
        return self.api.get(f'/contact/{contact_id}')

    def update_contact_status(
        self,
        contact_id: str,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = {}
        if status is not None:
            data['status'] = status
        if priority is not None:
            data['priority'] = priority
        if notes is not None:
            data['notes'] = notes
        return self.api.put(f'/contact/{contact_id}/status', data)

    def reply_to_contact(self, contact_id: str, message: str) -> Dict[str, Any]:
        return self.api.post(f'/contact/{contact_id}/reply', {'message': message})

    def mark_as_spam(self, contact_id: str) -> Dict[str, Any]:
        return self.api.put(f'/contact/{contact_id}/spam')

    def delete_contact(self, contact_id: str) -> Dict[str, Any]:
        return self.api.delete(f'/contact/{contact_id}')

    def get_stats(self) -> Dict[str, Any]:
        return self.api.get('/contact/stats')
