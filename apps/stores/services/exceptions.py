"""
Domain-specific exceptions for stores app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class StoresServiceError(Exception):
    """Base exception for all stores service errors."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Raised when a store does not exist."""
    pass


class InvalidStoreCodeError(StoresServiceError):
    """Raised when no store matches a store code."""
    pass


class AlreadyMemberError(StoresServiceError):
    """Raised when a device tries to join a store it already belongs to."""
    pass


class NotMemberError(StoresServiceError):
    """Raised when a device is not a member of the store."""
    pass


class OwnerCannotLeaveError(StoresServiceError):
    """Raised when the owner tries to leave while other members remain."""
    pass


class InsufficientPermissionsError(StoresServiceError):
    """Raised when a device lacks the role required for an action."""
    pass


class StoreCodeGenerationError(StoresServiceError):
    """Raised when no unique store code could be generated."""
    pass
