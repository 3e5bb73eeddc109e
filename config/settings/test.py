"""Test settings for GameDey project.

In-memory SQLite without migrations, local email, eager Celery and the
local chat and payment providers, so the test suite needs no external
service.
"""

from .base import *  # noqa: F401,F403


class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

MIGRATION_MODULES = DisableMigrations()

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

BOOKING_AUTO_CONFIRM = True
BOOKING_CURRENCY = 'NGN'
BOOKING_AUTO_COMPLETE_HOURS = 24

CHAT_ROOM_PROVIDER = 'apps.chat.providers.LocalChatRoomProvider'
PAYMENT_GATEWAY = 'apps.finances.gateways.LocalGateway'
