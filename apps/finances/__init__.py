"""Finances app package.

This app records payments for bookings. The client pays through the
payment gateway (Paystack) and then asks the backend to confirm the
payment reference; confirmation verifies the transaction with the
gateway, stores a Payment and marks the booking as paid.
"""
