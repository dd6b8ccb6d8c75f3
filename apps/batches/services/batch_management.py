"""
Batch scan management service.

Creates batch scan sessions and stages items in them. Item insertion and
the item counter update happen in one transaction under a row lock on the
batch, so the counter always matches the number of items.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, QuerySet

from apps.batches.models import BatchScan, BatchScanItem

from .exceptions import (
    BatchNotFoundError,
    BatchNotInProgressError,
    InvalidBatchItemError,
)

logger = logging.getLogger(__name__)


def create_batch(
    *,
    device_id: str,
    name: str = '',
    store=None,
    created_by_member=None
) -> BatchScan:
    """
    Start a new batch scan session for a device.

    Args:
        device_id: Device running the scan
        name: Label for the session
        store: Store the resulting entries belong to (optional)
        created_by_member: StoreMember running the scan (optional)

    Returns:
        Created BatchScan with no items
    """
    batch = BatchScan.objects.create(
        device_id=device_id,
        name=name or '',
        store=store,
        created_by_member=created_by_member,
    )

    logger.info("Batch %s created by device %s", batch.id, device_id)
    return batch


def get_batch(*, batch_id: UUID) -> BatchScan:
    """
    Raises:
        BatchNotFoundError: If batch doesn't exist
    """
    try:
        return BatchScan.objects.get(id=batch_id)
    except BatchScan.DoesNotExist:
        raise BatchNotFoundError(f"Batch with ID {batch_id} not found")


def list_device_batches(*, device_id: str) -> QuerySet[BatchScan]:
    """Get a device's batch scans, newest first."""
    return BatchScan.objects.filter(device_id=device_id).order_by('-created_at')


@transaction.atomic
def add_item(
    *,
    batch_id: UUID,
    barcode: str,
    product_name: str,
    expiration_date: date,
    category: Optional[str] = None,
    quantity: int = 1,
    location: str = '',
    notes: str = '',
    image_url: Optional[str] = None
) -> tuple[BatchScanItem, int]:
    """
    Stage a scanned product in a batch.

    Uses row-level locking on the batch so concurrent inserts get distinct
    positions and no counter increment is lost.

    Args:
        batch_id: UUID of the batch
        barcode, product_name, expiration_date: Scanned product
        category, quantity, location, notes, image_url: Optional details

    Returns:
        Tuple of (created BatchScanItem, batch item count after insert)

    Raises:
        BatchNotFoundError: If batch doesn't exist
        BatchNotInProgressError: If batch is already completed
        InvalidBatchItemError: If quantity is not positive
    """
    if quantity is None or int(quantity) < 1:
        raise InvalidBatchItemError("Quantity must be a positive integer")

    try:
        batch = BatchScan.objects.select_for_update().get(id=batch_id)
    except BatchScan.DoesNotExist:
        raise BatchNotFoundError(f"Batch with ID {batch_id} not found")

    if not batch.is_in_progress:
        logger.warning("Rejected item for completed batch %s", batch_id)
        raise BatchNotInProgressError("Batch is already completed")

    item = BatchScanItem.objects.create(
        batch=batch,
        position=batch.item_count + 1,
        barcode=barcode,
        product_name=product_name,
        expiration_date=expiration_date,
        category=category,
        quantity=quantity,
        location=location or '',
        notes=notes or '',
        image_url=image_url,
    )

    BatchScan.objects.filter(id=batch.id).update(item_count=F('item_count') + 1)
    batch.refresh_from_db(fields=['item_count'])

    logger.info("Item %s added to batch %s (%d items)", item.id, batch.id, batch.item_count)
    return item, batch.item_count


def get_batch_items(*, batch_id: UUID) -> QuerySet[BatchScanItem]:
    """
    Get a batch's items in insertion order.

    Raises:
        BatchNotFoundError: If batch doesn't exist
    """
    if not BatchScan.objects.filter(id=batch_id).exists():
        raise BatchNotFoundError(f"Batch with ID {batch_id} not found")

    return BatchScanItem.objects.filter(batch_id=batch_id).order_by('position')


@transaction.atomic
def delete_batch(*, batch_id: UUID) -> None:
    """
    Delete a batch in any state together with its items.

    Entries already created from a completed batch are kept.

    Raises:
        BatchNotFoundError: If batch doesn't exist
    """
    deleted, _ = BatchScan.objects.filter(id=batch_id).delete()
    if not deleted:
        raise BatchNotFoundError(f"Batch with ID {batch_id} not found")

    logger.info("Batch %s deleted", batch_id)
