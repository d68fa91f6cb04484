"""Local development settings for HallBook.

Runs against SQLite by default (no overlap exclusion constraint there, the
resolver alone guards admissions), prints outgoing mail to the console and
executes notification tasks inline so no Redis or Celery worker is needed.
"""

from .base import *  # noqa: F401,F403

DEBUG = True
ALLOWED_HOSTS = ['*']

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Notification tasks run in-process unless a worker is explicitly wanted
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_TASK_ALWAYS_EAGER', 'true').lower() == 'true'

CORS_ALLOW_ALL_ORIGINS = True

# Show admissions, conflicts and bus dispatch while developing
LOGGING['loggers']['apps']['level'] = os.environ.get('LOG_LEVEL', 'DEBUG')
LOGGING['loggers']['shared']['level'] = os.environ.get('LOG_LEVEL', 'DEBUG')

STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}
