"""
Contact Management Views

API endpoints for contact form submission and admin management.
"""
import logging

from rest_framework import generics, status, filters
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend

from accounts.permissions import IsAdminRole
from core.pagination import PagePagination
from .filters import ContactMessageFilter
from .models import ContactMessage
from .serializers import (
    ContactFormSubmitSerializer,
    ContactMessageSerializer,
    ContactStatusUpdateSerializer,
    ContactReplyCreateSerializer,
)
from .rate_limiting import rate_limit_contact_form, get_client_ip
from .tasks import send_staff_notification, send_reply_email

logger = logging.getLogger(__name__)


def get_contact_or_404(pk):
    try:
        return ContactMessage.objects.get(pk=pk)
    except ContactMessage.DoesNotExist:
        raise NotFound('Contact not found')


def count_by(queryset, field):
    """``{value: count}`` for ``field`` over ``queryset``."""
    rows = queryset.order_by().values(field).annotate(count=Count('id'))
    return {row[field]: row['count'] for row in rows}


class ContactPagination(PagePagination):
    results_key = 'contacts'


class ContactMessageListView(generics.ListAPIView):
    """
    Contact collection.

    POST /api/contact  public submission, rate limited to prevent spam
    GET  /api/contact  admin list

    Query Parameters (GET):
    - status: Filter by status (``all`` for no filter)
    - priority: Filter by priority
    - projectType: Filter by project type
    - search: Search in name, email, subject or message
    - includeSpam: ``true`` to include spam
    - page: Page number (default: 1)
    - limit: Items per page (default: 20)
    """

    serializer_class = ContactMessageSerializer
    pagination_class = ContactPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = ContactMessageFilter
    search_fields = ['name', 'email', 'subject', 'message']
    ordering_fields = ['created_at', 'updated_at', 'status', 'priority']
    ordering = ['-created_at']

    def get_authenticators(self):
        # Submissions are anonymous; a stale token must not block them
        if self.request is not None and self.request.method == 'POST':
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAdminRole()]

    def get_queryset(self):
        return ContactMessage.objects.prefetch_related('replies__sent_by')

    def list(self, request, *args, **kwargs):
        response = super().list(request, *args, **kwargs)
        response.data['stats'] = count_by(
            ContactMessage.objects.filter(is_spam=False), 'status'
        )
        return response

    @rate_limit_contact_form()
    def post(self, request):
        """Submit a contact form."""
        serializer = ContactFormSubmitSerializer(
            data=request.data,
            context={
                'ip_address': get_client_ip(request),
                'user_agent': request.META.get('HTTP_USER_AGENT', '')[:500],
            }
        )
        serializer.is_valid(raise_exception=True)
        contact_message = serializer.save()

        logger.info(f"New contact message {contact_message.id} from {contact_message.email}")

        # Notification failures never undo the submission
        try:
            send_staff_notification.delay(str(contact_message.id))
        except Exception as e:
            logger.error(f"Failed to send contact notification for {contact_message.id}: {e}")

        return Response(
            {
                'success': True,
                'message': "Thank you for your message! I'll get back to you soon.",
                'data': {'contactId': str(contact_message.id)}
            },
            status=status.HTTP_201_CREATED
        )


class ContactMessageDetailView(APIView):
    """
    Get or delete a single contact message (admin only).

    GET    /api/contact/:id  (a new message becomes read)
    DELETE /api/contact/:id
    """

    permission_classes = [IsAdminRole]

    def get(self, request, pk):
        message = get_contact_or_404(pk)
        message.mark_read()
        return Response({
            'success': True,
            'data': ContactMessageSerializer(message).data
        })

    def delete(self, request, pk):
        message = get_contact_or_404(pk)
        message.delete()
        logger.info(f"Contact {pk} deleted by {request.user.email}")
        return Response({
            'success': True,
            'message': 'Contact deleted successfully'
        })


class ContactStatusUpdateView(APIView):
    """
    Update contact message status, priority or notes.

    PUT /api/contact/:id/status
    """

    permission_classes = [IsAdminRole]

    def put(self, request, pk):
        message = get_contact_or_404(pk)
        serializer = ContactStatusUpdateSerializer(message, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        message = serializer.save()

        return Response({
            'success': True,
            'message': 'Contact updated successfully',
            'data': ContactMessageSerializer(message).data
        })


class ContactMessageReplyView(APIView):
    """
    Send reply to a contact message.

    POST /api/contact/:id/reply

    The email goes out before anything is recorded; a transport failure
    leaves the message untouched.
    """

    permission_classes = [IsAdminRole]

    def post(self, request, pk):
        message = get_contact_or_404(pk)

        serializer = ContactReplyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reply_message = serializer.validated_data['message']

        try:
            send_reply_email(message, reply_message)
        except Exception as e:
            logger.error(f"Failed to send reply for contact {message.id}: {e}")
            return Response(
                {'success': False, 'message': 'Failed to send reply email'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        message.record_reply(reply_message, sent_by=request.user)

        return Response({
            'success': True,
            'message': 'Reply sent successfully'
        })


class ContactMarkSpamView(APIView):
    """
    Flag a contact message as spam (archives it).

    PUT /api/contact/:id/spam
    """

    permission_classes = [IsAdminRole]

    def put(self, request, pk):
        message = get_contact_or_404(pk)
        message.mark_spam()
        return Response({
            'success': True,
            'message': 'Contact marked as spam'
        })


class ContactStatsView(APIView):
    """
    Get contact message statistics.

    GET /api/contact/stats
    """

    permission_classes = [IsAdminRole]

    def get(self, request):
        queryset = ContactMessage.objects.filter(is_spam=False)
        recent = queryset.order_by('-created_at')[:5]

        return Response({
            'success': True,
            'data': {
                'total': queryset.count(),
                'byStatus': count_by(queryset, 'status'),
                'byPriority': count_by(queryset, 'priority'),
                'byProjectType': count_by(queryset, 'project_type'),
                'spam': ContactMessage.objects.filter(is_spam=True).count(),
                'recent': [
                    {
                        'id': str(message.id),
                        'name': message.name,
                        'email': message.email,
                        'subject': message.subject,
                        'status': message.status,
                        'createdAt': message.created_at,
                    }
                    for message in recent
                ],
            }
        })
