"""
Rate Limiting Utilities for Contact Form

Prevents spam and abuse of the contact form.
"""
from functools import wraps
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from django.utils import timezone
from datetime import timedelta
from rest_framework.response import Response
from rest_framework import status
from .models import ContactFormRateLimit


def _valid_ip(value):
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value


def get_client_ip(request):
    """
    Get client IP address from request.

    X-Forwarded-For is only read behind a trusted proxy
    (TRUST_X_FORWARDED_FOR). Values that are not IP addresses are ignored.
    """
    if settings.TRUST_X_FORWARDED_FOR:
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR', '')
        ip = _valid_ip(x_forwarded_for.split(',')[0].strip())
        if ip:
            return ip
    return _valid_ip(request.META.get('REMOTE_ADDR', ''))


def check_rate_limit(identifier, identifier_type, max_count, window_hours):
    """
    Check if identifier has exceeded rate limit.

    Args:
        identifier: IP address or email
        identifier_type: 'ip' or 'email'
        max_count: Maximum allowed submissions
        window_hours: Time window in hours

    Returns:
        tuple: (is_allowed, retry_after_seconds)
    """
    now = timezone.now()
    window_start = now - timedelta(hours=window_hours)

    rate_limit = ContactFormRateLimit.objects.filter(
        identifier=identifier,
        identifier_type=identifier_type
    ).first()

    if rate_limit is None:
        return True, 0

    # Window expired, start over
    if rate_limit.window_start < window_start:
        rate_limit.count = 0
        rate_limit.window_start = now
        rate_limit.save()

    if rate_limit.count >= max_count:
        window_end = rate_limit.window_start + timedelta(hours=window_hours)
        retry_after = (window_end - now).total_seconds()
        return False, max(int(retry_after), 1)

    return True, 0


def increment_rate_limit(identifier, identifier_type):
    """Increment the rate limit counter."""
    rate_limit, created = ContactFormRateLimit.objects.get_or_create(
        identifier=identifier,
        identifier_type=identifier_type,
        defaults={'count': 0, 'window_start': timezone.now()}
    )

    rate_limit.count += 1
    rate_limit.save()


def purge_expired_windows(max_age_hours=24):
    """Delete rate limit rows whose window closed more than ``max_age_hours`` ago."""
    cutoff = timezone.now() - timedelta(hours=max_age_hours)
    deleted, _ = ContactFormRateLimit.objects.filter(window_start__lt=cutoff).delete()
    return deleted


def _too_many(message, retry_after):
    return Response(
        {
            'success': False,
            'message': message,
            'retry_after': retry_after
        },
        status=status.HTTP_429_TOO_MANY_REQUESTS,
        headers={'Retry-After': str(retry_after)}
    )


def rate_limit_contact_form(max_per_hour=None, max_per_day_email=None):
    """
    Decorator for rate limiting contact form submissions.

    Args:
        max_per_hour: Maximum submissions per IP per hour
            (defaults to CONTACT_FORM_RATE_LIMIT_PER_HOUR)
        max_per_day_email: Maximum submissions per email per day
            (defaults to CONTACT_FORM_RATE_LIMIT_PER_DAY)
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(self, request, *args, **kwargs):
            per_hour = max_per_hour or settings.CONTACT_FORM_RATE_LIMIT_PER_HOUR
            per_day = max_per_day_email or settings.CONTACT_FORM_RATE_LIMIT_PER_DAY

            ip = get_client_ip(request)
            email = request.data.get('email')
            if isinstance(email, str):
                email = email.strip().lower()
            else:
                email = None

            # Check IP rate limit (per hour)
            if ip:
                ip_allowed, ip_retry = check_rate_limit(ip, 'ip', per_hour, 1)
                if not ip_allowed:
                    return _too_many('Too many requests. Please try again later.', ip_retry)

            # Check email rate limit (per day)
            if email:
                email_allowed, email_retry = check_rate_limit(email, 'email', per_day, 24)
                if not email_allowed:
                    return _too_many(
                        'Too many submissions from this email. Please try again tomorrow.',
                        email_retry
                    )

            response = view_func(self, request, *args, **kwargs)

            # Only successful submissions count
            if response.status_code == status.HTTP_201_CREATED:
                if ip:
                    increment_rate_limit(ip, 'ip')
                if email:
                    increment_rate_limit(email, 'email')

            return response

        return wrapped_view
    return decorator
