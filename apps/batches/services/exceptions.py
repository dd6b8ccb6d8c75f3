"""
Domain-specific exceptions for batches app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class BatchesServiceError(Exception):
    """Base exception for all batches service errors."""
    pass


class BatchNotFoundError(BatchesServiceError):
    """Raised when a batch scan does not exist."""
    pass


class BatchNotInProgressError(BatchesServiceError):
    """Raised when adding to or completing a batch that is already completed."""
    pass


class InvalidBatchItemError(BatchesServiceError):
    """Raised when item data breaks a business rule (e.g. quantity < 1)."""
    pass
