"""Chat app package.

Provisions one chat room per booking and counterpart (coach, facility)
in the external chat service once a booking is confirmed.
"""
