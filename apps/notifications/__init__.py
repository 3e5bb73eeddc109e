"""Notifications app package.

Handles delivery of booking confirmations and reminders by email and
stores in-app notifications for the user's inbox.
"""
