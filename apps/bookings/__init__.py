"""Bookings app package.

This app holds the booking engine: creating bookings for a facility, a
coach or both, pricing them, driving their status and answering
availability queries over hourly slots. Slot conflicts are checked
inside a database transaction, and side effects (emails, chat rooms,
in-app notifications) run from domain events after commit.
"""
