"""
Test settings for the Portfolio API.

Layers fast, self-contained overrides over core.settings:
SQLite, eager Celery, in-memory email and no admin bootstrap.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')

from core.settings import *  # noqa: E402,F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

ADMIN_BOOTSTRAP_ENABLED = False

SECURE_SSL_REDIRECT = False

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CLOUDINARY_CLOUD_NAME = 'demo'
CLOUDINARY_API_KEY = 'test-key'
CLOUDINARY_API_SECRET = 'test-secret'
