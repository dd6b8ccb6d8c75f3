"""
Domain-specific exceptions for products app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ProductsServiceError(Exception):
    """Base exception for all products service errors."""
    pass


class ProductNotFoundError(ProductsServiceError):
    """Raised when no product has the requested barcode."""
    pass


class EntryNotFoundError(ProductsServiceError):
    """Raised when a product entry does not exist."""
    pass


class InvalidEntryError(ProductsServiceError):
    """Raised when entry data breaks a business rule (e.g. quantity < 1)."""
    pass
