"""
Account services: first-run admin bootstrap.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

logger = logging.getLogger(__name__)


def ensure_default_admin(email=None, password=None, name=None):
    """
    Create the default admin account if no user with ``ADMIN_EMAIL`` exists.

    Idempotent: an existing account is left untouched.

    Returns:
        (user, created) tuple
    """
    User = get_user_model()

    email = (email or settings.ADMIN_EMAIL).strip().lower()
    password = password or settings.ADMIN_PASSWORD
    name = name or settings.ADMIN_NAME

    existing = User.objects.filter(email=email).first()
    if existing is not None:
        logger.debug(f"Admin account {email} already exists")
        return existing, False

    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=password,
            name=name,
            role=User.UserRole.ADMIN,
            is_staff=True,
        )

    logger.info(f"Default admin account created: {email}")
    return user, True


def bootstrap_admin_after_migrate(sender, **kwargs):
    """``post_migrate`` receiver running the admin bootstrap when enabled."""
    if not getattr(settings, 'ADMIN_BOOTSTRAP_ENABLED', False):
        return
    ensure_default_admin()
