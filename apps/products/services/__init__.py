"""
Products app services layer.

Catalog upserts, entry lifecycle and the expiration status classifier.
"""

from .exceptions import (
    ProductsServiceError,
    ProductNotFoundError,
    EntryNotFoundError,
    InvalidEntryError,
)

from .expiry_status import (
    classify,
    days_until_expiry,
    needs_attention,
    today,
)

from .catalog import (
    upsert_product,
    get_product_by_barcode,
    add_product_image,
    list_product_images,
)

from .entry_management import (
    create_entry,
    get_entry,
    update_entry,
    delete_entry,
    list_entries,
    get_entry_stats,
    refresh_entry_statuses,
)


__all__ = [
    # Exceptions
    'ProductsServiceError',
    'ProductNotFoundError',
    'EntryNotFoundError',
    'InvalidEntryError',

    # Classifier
    'classify',
    'days_until_expiry',
    'needs_attention',
    'today',

    # Catalog
    'upsert_product',
    'get_product_by_barcode',
    'add_product_image',
    'list_product_images',

    # Entries
    'create_entry',
    'get_entry',
    'update_entry',
    'delete_entry',
    'list_entries',
    'get_entry_stats',
    'refresh_entry_statuses',
]
