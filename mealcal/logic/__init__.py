"""Core business logic layer.

Subpackages:
- calendar: week arithmetic and local-time day intervals
- session: calendar session state (navigation + editor intents)
- reporting: week summary aggregation
"""
__all__ = ["calendar", "session", "reporting"]
