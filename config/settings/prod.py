"""Production settings for the GameDey backend.

Secrets and hosts must come from the environment; startup fails with
``ImproperlyConfigured`` when one of the required values is missing.
"""

import os

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401,F403
from .base import env_bool, env_list

DEBUG = False

_REQUIRED = ('DJANGO_SECRET_KEY', 'DJANGO_ALLOWED_HOSTS', 'PAYSTACK_SECRET_KEY', 'CHAT_API_KEY')
_missing = [name for name in _REQUIRED if not os.environ.get(name)]
if _missing:
    raise ImproperlyConfigured(f"Missing required environment variables: {', '.join(_missing)}")

ALLOWED_HOSTS = env_list('DJANGO_ALLOWED_HOSTS', '')

# TLS is terminated at the load balancer
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = env_bool('SECURE_SSL_REDIRECT', True)
SECURE_HSTS_SECONDS = int(os.environ.get('SECURE_HSTS_SECONDS', 60 * 60 * 24 * 30))
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
EMAIL_HOST = os.environ.get('EMAIL_HOST', 'localhost')
EMAIL_PORT = int(os.environ.get('EMAIL_PORT', 587))
EMAIL_USE_TLS = env_bool('EMAIL_USE_TLS', True)
EMAIL_HOST_USER = os.environ.get('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = os.environ.get('EMAIL_HOST_PASSWORD', '')

# Integrations always talk to the real services in production
CHAT_ROOM_PROVIDER = 'apps.chat.providers.HttpChatRoomProvider'
PAYMENT_GATEWAY = 'apps.finances.gateways.PaystackGateway'
