"""
Domain-specific exceptions for daily_checks app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class DailyChecksServiceError(Exception):
    """Base exception for all daily check service errors."""
    pass


class SessionNotFoundError(DailyChecksServiceError):
    """Raised when a daily check session does not exist."""
    pass


class StoreNotFoundError(DailyChecksServiceError):
    """Raised when the store to check does not exist."""
    pass


class WorklistItemNotFoundError(DailyChecksServiceError):
    """Raised when an entry is not on the session's worklist."""
    pass


class SessionNotInProgressError(DailyChecksServiceError):
    """Raised when acting on or completing a completed session."""
    pass


class ItemAlreadyProcessedError(DailyChecksServiceError):
    """Raised when a worklist item already has an action."""
    pass


class InvalidWarningDaysError(DailyChecksServiceError):
    """Raised when warning_days is outside the allowed range."""
    pass


class InvalidActionError(DailyChecksServiceError):
    """Raised for an unknown check action."""
    pass


class NotStoreMemberError(DailyChecksServiceError):
    """Raised when the member does not belong to the session's store."""
    pass
