import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from apps.batches.models import BatchScan, BatchScanItem, BatchStatus
from apps.stores.models import Store, StoreMember, StoreRole


@pytest.fixture
def api_client():
    """Return an API client (devices are not authenticated)."""
    return APIClient()


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def device_id():
    return 'scanner-1'


@pytest.fixture
def batch(db, device_id):
    """Create an empty in-progress batch."""
    return BatchScan.objects.create(device_id=device_id, name='Morning')


@pytest.fixture
def completed_batch(db, device_id):
    """Create a completed batch."""
    return BatchScan.objects.create(
        device_id=device_id,
        name='Yesterday',
        status=BatchStatus.COMPLETED,
        completed_at=timezone.now(),
    )


@pytest.fixture
def batch_with_items(batch, today):
    """Batch holding three staged items."""
    for position, (barcode, name, days) in enumerate(
        [('111', 'Milk', -1), ('222', 'Bread', 3), ('333', 'Rice', 60)],
        start=1
    ):
        BatchScanItem.objects.create(
            batch=batch,
            position=position,
            barcode=barcode,
            product_name=name,
            expiration_date=today + timedelta(days=days),
        )
    batch.item_count = 3
    batch.save(update_fields=['item_count'])
    return batch


@pytest.fixture
def store(db, device_id):
    """Store where the scanning device is owner."""
    store = Store.objects.create(name='Corner Shop', code='ABC-2345', created_by_device_id=device_id)
    StoreMember.objects.create(store=store, device_id=device_id, nickname='Anna', role=StoreRole.OWNER)
    return store
