"""Test settings for HallBook.

In-memory SQLite, Celery tasks executed eagerly and emails collected in
``django.core.mail.outbox``.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

RESERVATION_DEFAULT_STATUS = 'approved'

LOG_LEVEL = 'WARNING'
LOGGING['loggers']['apps']['level'] = LOG_LEVEL  # noqa: F405
LOGGING['loggers']['shared']['level'] = LOG_LEVEL  # noqa: F405
