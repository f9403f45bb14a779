"""
Celery configuration for the Portfolio API.

Tasks to run in background:
- Contact notification emails to the site owner
- Welcome emails for new accounts
- Periodic cleanup of contact form rate-limit windows
"""
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

# Create Celery app
app = Celery('core')

# Load config from Django settings with CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()


# =============================================================================
# CELERY BEAT SCHEDULE - Periodic Tasks
# =============================================================================
app.conf.beat_schedule = {
    # Drop expired contact form rate-limit windows (run daily at 3 AM)
    'cleanup-contact-rate-limits': {
        'task': 'contact.tasks.cleanup_rate_limits',
        'schedule': crontab(hour=3, minute=0),
    },
}

# Celery configuration
app.conf.update(
    # Task result expiry
    result_expires=3600,  # 1 hour

    # Task time limits
    task_time_limit=120,
    task_soft_time_limit=90,

    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Prefetch multiplier (1 = fair distribution)
    worker_prefetch_multiplier=1,

    # Serialization
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    timezone='UTC',
    enable_utc=True,
)
