"""
Domain-specific exceptions for notifications app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class NotificationsServiceError(Exception):
    """Base exception for all notifications service errors."""
    pass


class PushTokenNotFoundError(NotificationsServiceError):
    """Raised when a device has no registered push token."""
    pass


class ScheduleNotFoundError(NotificationsServiceError):
    """Raised when a notification schedule does not exist."""
    pass


class InvalidScheduleError(NotificationsServiceError):
    """Raised when schedule data is invalid (bad time, missing weekday)."""
    pass
