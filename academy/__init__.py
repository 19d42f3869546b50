"""
SmartTrading Academy service.

Marketing site data, the lead quiz, the 5-day challenge and the
learner-facing academy API on top of the hosted backend.
"""
