import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from apps.products.models import Product, ProductEntry, EntryStatus
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
    return 'device-alpha'


@pytest.fixture
def store(db, device_id):
    """Create a store owned by ``device_id``."""
    store = Store.objects.create(
        name='Corner Shop',
        code='ABC-2345',
        created_by_device_id=device_id,
    )
    StoreMember.objects.create(
        store=store,
        device_id=device_id,
        nickname='Owner',
        role=StoreRole.OWNER,
    )
    return store


@pytest.fixture
def owner_member(store, device_id):
    return store.get_membership(device_id)


@pytest.fixture
def product(db):
    """Create and return a catalog product."""
    return Product.objects.create(
        barcode='7038010009457',
        name='Whole Milk 1L',
        category='Dairy',
    )


@pytest.fixture
def make_entry(db, product, today):
    """Factory creating an entry that expires ``days`` from today."""

    def _make_entry(days=10, store=None, device_id='device-alpha', status=EntryStatus.FRESH, **kwargs):
        return ProductEntry.objects.create(
            product=product,
            barcode=product.barcode,
            product_name=kwargs.pop('product_name', product.name),
            expiration_date=today + timedelta(days=days),
            status=status,
            store=store,
            scanned_by_device_id=device_id,
            **kwargs
        )

    return _make_entry
