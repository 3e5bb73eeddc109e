"""Development settings for GameDey project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts, using the
console email backend and the local chat and payment providers. Do not
use these settings in production!
"""

import os

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# No external services needed to click through the booking flow
CHAT_ROOM_PROVIDER = os.environ.get('CHAT_ROOM_PROVIDER', 'apps.chat.providers.LocalChatRoomProvider')
PAYMENT_GATEWAY = os.environ.get('PAYMENT_GATEWAY', 'apps.finances.gateways.LocalGateway')
