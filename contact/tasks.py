"""
Contact Management Email Tasks

Celery tasks for sending contact-related emails.
"""
import logging

from celery import shared_task
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.conf import settings

from .models import ContactMessage
from .rate_limiting import purge_expired_windows

logger = logging.getLogger(__name__)


@shared_task
def send_staff_notification(message_id):
    """
    Send notification email to the site owner about a new contact submission.

    Args:
        message_id: UUID of the ContactMessage
    """
    try:
        message = ContactMessage.objects.get(id=message_id)
    except ContactMessage.DoesNotExist:
        logger.warning(f"Contact message {message_id} not found")
        return f"Contact message {message_id} not found"

    subject = f"New Contact: {message.subject}"

    # Plain text version
    text_content = f"""New contact form submission received:

From: {message.name} ({message.email})
Phone: {message.phone or 'Not provided'}
Company: {message.company or 'Not provided'}
Project Type: {message.get_project_type_display()}
Budget: {message.get_budget_display()}
Timeline: {message.get_timeline_display()}
Received: {message.created_at.strftime('%Y-%m-%d %H:%M:%S')}
IP Address: {message.ip_address or 'Unknown'}

Subject: {message.subject}

Message:
{message.message}

---
Contact ID: {message.id}
"""

    html_content = render_to_string('contact/emails/staff_notification.html', {
        'message': message,
    })

    email = EmailMultiAlternatives(
        subject=subject,
        body=text_content,
        from_email=settings.CONTACT_EMAIL_FROM,
        to=[settings.CONTACT_EMAIL_TO],
        reply_to=[message.email]
    )
    email.attach_alternative(html_content, "text/html")
    email.send(fail_silently=False)

    logger.info(f"Staff notification sent for contact {message.id}")
    return f"Staff notification sent for {message.id}"


def send_reply_email(message, reply_message):
    """
    Send a reply email to the contact form submitter.

    Runs synchronously so the caller can report a transport failure;
    exceptions from the email backend propagate.

    Args:
        message: ContactMessage being answered
        reply_message: Reply body
    """
    subject = f"Re: {message.subject}"
    signature = settings.CONTACT_SIGNATURE

    # Plain text version
    text_content = f"""Hi {message.name},

{reply_message}

---
Your original message:
Subject: {message.subject}
{message.message}

Best regards,
{signature}
"""

    html_content = render_to_string('contact/emails/reply.html', {
        'message': message,
        'reply_message': reply_message,
        'signature': signature,
    })

    email = EmailMultiAlternatives(
        subject=subject,
        body=text_content,
        from_email=settings.CONTACT_EMAIL_FROM,
        to=[message.email],
        reply_to=[settings.CONTACT_EMAIL_REPLY_TO]
    )
    email.attach_alternative(html_content, "text/html")
    email.send(fail_silently=False)

    logger.info(f"Reply email sent to {message.email} for contact {message.id}")


@shared_task
def cleanup_rate_limits():
    """Purge contact form rate limit windows older than a day."""
    deleted = purge_expired_windows(max_age_hours=24)
    logger.info(f"Purged {deleted} expired contact rate limit windows")
    return deleted
