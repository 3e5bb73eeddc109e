"""Providers app package.

Holds the provider directory (sports, facilities, coaches) and the
pricing catalog (hourly rates and session packages) that the booking
engine consults. Providers are managed through the admin; the public
API is read-only.
"""
