"""
Product entry service.

Entries are created from single scans and from batch completion. The
cached ``status`` column is written on every create and update; listings,
stats and filters classify again so they stay correct as days pass.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.products.models import ProductEntry, EntryStatus

from .catalog import upsert_product
from .exceptions import EntryNotFoundError, InvalidEntryError
from .expiry_status import classify, today

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'product_name',
    'category',
    'expiration_date',
    'quantity',
    'location',
    'notes',
    'image_url',
)


def _validate_quantity(quantity) -> None:
    if quantity is None or int(quantity) < 1:
        raise InvalidEntryError("Quantity must be a positive integer")


@transaction.atomic
def create_entry(
    *,
    barcode: str,
    product_name: str,
    expiration_date: date,
    quantity: int = 1,
    category: Optional[str] = None,
    location: str = '',
    notes: str = '',
    image_url: Optional[str] = None,
    store=None,
    created_by_member=None,
    scanned_by_device_id: str = ''
) -> ProductEntry:
    """
    Record a scanned product with its expiration date.

    This operation:
    1. Upserts the catalog record for the barcode
    2. Classifies the expiration date
    3. Inserts the entry referencing the product

    Args:
        barcode: Scanned barcode
        product_name: Name shown for this entry
        expiration_date: Calendar date the product expires
        quantity: Number of items (>= 1)
        category, location, notes, image_url: Optional details
        store: Owning Store (optional)
        created_by_member: StoreMember who recorded it (optional)
        scanned_by_device_id: Device that scanned it

    Returns:
        Created ProductEntry

    Raises:
        InvalidEntryError: If quantity is not positive
    """
    _validate_quantity(quantity)

    product = upsert_product(
        barcode=barcode,
        name=product_name,
        category=category,
        image_url=image_url,
    )

    entry = ProductEntry.objects.create(
        product=product,
        barcode=barcode,
        product_name=product_name,
        category=category,
        expiration_date=expiration_date,
        quantity=quantity,
        location=location or '',
        notes=notes or '',
        image_url=image_url,
        status=classify(expiration_date),
        store=store,
        created_by_member=created_by_member,
        scanned_by_device_id=scanned_by_device_id or '',
    )

    logger.info(
        "Entry %s created for barcode %s (expires %s, %s)",
        entry.id, barcode, expiration_date, entry.status
    )
    return entry


def get_entry(*, entry_id: UUID) -> ProductEntry:
    """
    Raises:
        EntryNotFoundError: If entry doesn't exist
    """
    try:
        return (
            ProductEntry.objects
            .select_related('product', 'store', 'created_by_member')
            .get(id=entry_id)
        )
    except ProductEntry.DoesNotExist:
        raise EntryNotFoundError(f"Entry with ID {entry_id} not found")


@transaction.atomic
def update_entry(*, entry_id: UUID, **fields) -> ProductEntry:
    """
    Merge partial fields into an entry and refresh its status.

    Args:
        entry_id: UUID of the entry
        **fields: Any of product_name, category, expiration_date, quantity,
            location, notes, image_url. Unknown keys are rejected.

    Returns:
        Updated ProductEntry

    Raises:
        EntryNotFoundError: If entry doesn't exist
        InvalidEntryError: If an unknown field or a bad quantity is given
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidEntryError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    try:
        entry = ProductEntry.objects.select_for_update().get(id=entry_id)
    except ProductEntry.DoesNotExist:
        raise EntryNotFoundError(f"Entry with ID {entry_id} not found")

    if 'quantity' in fields:
        _validate_quantity(fields['quantity'])

    update_fields = ['status', 'updated_at']
    for key, value in fields.items():
        setattr(entry, key, value)
        update_fields.append(key)

    entry.status = classify(entry.expiration_date)
    entry.save(update_fields=update_fields)

    logger.info("Entry %s updated (%s)", entry.id, ', '.join(sorted(fields)) or 'status only')
    return entry


@transaction.atomic
def delete_entry(*, entry_id: UUID) -> None:
    """
    Raises:
        EntryNotFoundError: If entry doesn't exist
    """
    deleted, _ = ProductEntry.objects.filter(id=entry_id).delete()
    if not deleted:
        raise EntryNotFoundError(f"Entry with ID {entry_id} not found")

    logger.info("Entry %s deleted", entry_id)


def list_entries(
    *,
    store_id: Optional[UUID] = None,
    device_id: Optional[str] = None,
    status: Optional[str] = None,
    reference_date: Optional[date] = None
) -> list[ProductEntry]:
    """
    List entries, soonest-expiring first.

    Args:
        store_id: Only entries of this store
        device_id: Only entries scanned by this device
        status: Only entries whose current classification matches
        reference_date: "today" for the status filter

    Returns:
        List of ProductEntry ordered by expiration date ascending
    """
    queryset = (
        ProductEntry.objects
        .select_related('product', 'store', 'created_by_member')
        .order_by('expiration_date', 'created_at')
    )

    if store_id:
        queryset = queryset.filter(store_id=store_id)

    if device_id:
        queryset = queryset.filter(scanned_by_device_id=device_id)

    if not status:
        return list(queryset)

    reference = reference_date or today()
    return [
        entry for entry in queryset
        if classify(entry.expiration_date, reference) == status
    ]


def get_entry_stats(
    *,
    store_id: Optional[UUID] = None,
    device_id: Optional[str] = None,
    reference_date: Optional[date] = None
) -> dict:
    """
    Count entries per current status.

    Every entry is classified again; the cached status column is not
    trusted because it goes stale as days pass.

    Returns:
        Dictionary with total, fresh, expiring_soon, expired
    """
    queryset = ProductEntry.objects.all()

    if store_id:
        queryset = queryset.filter(store_id=store_id)

    if device_id:
        queryset = queryset.filter(scanned_by_device_id=device_id)

    reference = reference_date or today()
    stats = {
        'total': 0,
        EntryStatus.FRESH.value: 0,
        EntryStatus.EXPIRING_SOON.value: 0,
        EntryStatus.EXPIRED.value: 0,
    }

    for expiration_date in queryset.values_list('expiration_date', flat=True):
        stats['total'] += 1
        stats[classify(expiration_date, reference)] += 1

    return stats


def refresh_entry_statuses(*, reference_date: Optional[date] = None) -> int:
    """
    Rewrite cached statuses that no longer match the current date.

    Returns:
        Number of entries whose status changed
    """
    reference = reference_date or today()
    changed = 0

    for entry in ProductEntry.objects.only('id', 'expiration_date', 'status').iterator():
        current = classify(entry.expiration_date, reference)
        if entry.status != current:
            ProductEntry.objects.filter(id=entry.id).update(status=current)
            changed += 1

    logger.info("Refreshed cached status of %d entries", changed)
    return changed
