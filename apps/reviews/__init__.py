"""Reviews app package.

Players rate the facility or the coach of a completed booking. Each new
review refreshes the provider's average rating and notifies its owner.
"""
