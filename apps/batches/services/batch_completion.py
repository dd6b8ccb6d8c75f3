"""
Batch completion service.

Turns every staged item of a batch into a product entry and closes the
batch. Completion is best-effort: each item is materialized inside its
own savepoint, a failing item is logged and reported, and the items
before and after it are still kept.
"""

import logging
from uuid import UUID

from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.batches.models import BatchScan, BatchStatus
from apps.products.services import create_entry, ProductsServiceError

from .exceptions import BatchNotFoundError, BatchNotInProgressError

logger = logging.getLogger(__name__)


@transaction.atomic
def complete_batch(*, batch_id: UUID) -> dict:
    """
    Complete a batch scan.

    This operation:
    1. Locks the batch and checks it is still in progress
    2. Creates one product entry per item, in insertion order, tagged
       with the batch's device, store and member
    3. Marks the batch completed with a completion timestamp

    Args:
        batch_id: UUID of the batch

    Returns:
        Dictionary with batch, entries_created and failed_item_ids

    Raises:
        BatchNotFoundError: If batch doesn't exist
        BatchNotInProgressError: If batch is already completed
    """
    try:
        batch = (
            BatchScan.objects
            .select_for_update()
            .select_related('store', 'created_by_member')
            .get(id=batch_id)
        )
    except BatchScan.DoesNotExist:
        raise BatchNotFoundError(f"Batch with ID {batch_id} not found")

    if not batch.is_in_progress:
        logger.warning("Batch %s completed twice", batch_id)
        raise BatchNotInProgressError("Batch is already completed")

    entries_created = 0
    failed_item_ids = []

    for item in batch.items.order_by('position'):
        try:
            with transaction.atomic():
                create_entry(
                    barcode=item.barcode,
                    product_name=item.product_name,
                    expiration_date=item.expiration_date,
                    quantity=item.quantity,
                    category=item.category,
                    location=item.location,
                    notes=item.notes,
                    image_url=item.image_url,
                    store=batch.store,
                    created_by_member=batch.created_by_member,
                    scanned_by_device_id=batch.device_id,
                )
        except (DatabaseError, ProductsServiceError):
            logger.exception("Failed to create entry for item %s of batch %s", item.id, batch.id)
            failed_item_ids.append(item.id)
            continue

        entries_created += 1

    batch.status = BatchStatus.COMPLETED
    batch.completed_at = timezone.now()
    batch.save(update_fields=['status', 'completed_at'])

    logger.info(
        "Batch %s completed: %d entries created, %d failed",
        batch.id, entries_created, len(failed_item_ids)
    )
    return {
        'batch': batch,
        'entries_created': entries_created,
        'failed_item_ids': failed_item_ids,
    }
