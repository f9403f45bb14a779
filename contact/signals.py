"""
Contact Management Signals

Django signals for contact-related events.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import ContactMessage

logger = logging.getLogger(__name__)


@receiver(post_save, sender=ContactMessage)
def contact_message_post_save(sender, instance, created, **kwargs):
    """
    Signal handler for contact message creation/update.
    """
    if created:
        logger.info(
            f"Contact message saved: {instance.id} ({instance.get_project_type_display()}) "
            f"from {instance.email}"
        )
    elif instance.is_spam:
        logger.debug(f"Contact message {instance.id} updated while flagged as spam")
