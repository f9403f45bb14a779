"""
Accounts Celery tasks.

Background tasks for user notifications.
"""
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
import logging

logger = logging.getLogger(__name__)


@shared_task
def send_welcome_email(user_id: str):
    """
    Send welcome email to a newly registered user.

    Usage:
        from accounts.tasks import send_welcome_email
        send_welcome_email.delay(str(user.id))
    """
    from accounts.models import User

    try:
        user = User.objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.error(f"User not found: {user_id}")
        return {'status': 'error', 'error': 'User not found'}

    subject = "Welcome to my Portfolio!"

    text_content = f"""Hi {user.name},

Thank you for joining my portfolio community. You can now log in and explore
projects, leave comments, and stay up to date with new work.

Visit: {settings.FRONTEND_URL}

Best regards,
{settings.CONTACT_SIGNATURE}
"""

    html_content = render_to_string('accounts/emails/welcome.html', {
        'user': user,
        'frontend_url': settings.FRONTEND_URL,
        'signature': settings.CONTACT_SIGNATURE,
    })

    email = EmailMultiAlternatives(
        subject=subject,
        body=text_content,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
    )
    email.attach_alternative(html_content, "text/html")
    email.send(fail_silently=False)

    logger.info(f"Welcome email sent to user {user_id}")
    return {'status': 'success', 'user_id': user_id}
