import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from apps.products.models import Product, ProductEntry
from apps.stores.models import Store, StoreMember, StoreRole


@pytest.fixture
def api_client():
    """Return an API client (devices are not authenticated)."""
    return APIClient()


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def store(db):
    """Create a store with an owner."""
    store = Store.objects.create(name='Corner Shop', code='ABC-2345', created_by_device_id='owner-device')
    StoreMember.objects.create(store=store, device_id='owner-device', nickname='Anna', role=StoreRole.OWNER)
    return store


@pytest.fixture
def member(store):
    """The store's owner membership."""
    return store.members.get(device_id='owner-device')


@pytest.fixture
def outsider(db):
    """Member of a different store."""
    other = Store.objects.create(name='Other Shop', code='XYZ-7890', created_by_device_id='outsider-device')
    return StoreMember.objects.create(store=other, device_id='outsider-device', nickname='Eve', role=StoreRole.OWNER)


@pytest.fixture
def make_entry(store, today):
    """Factory creating a store entry that expires ``days`` from today."""
    product = Product.objects.create(barcode='9000', name='Juice')

    def _make_entry(days, name='Juice', entry_store=None):
        return ProductEntry.objects.create(
            product=product,
            barcode=product.barcode,
            product_name=name,
            expiration_date=today + timedelta(days=days),
            store=entry_store or store,
        )

    return _make_entry


@pytest.fixture
def stocked_store(store, make_entry):
    """Store with expired, expiring and fresh entries."""
    make_entry(-2, name='Expired yoghurt')
    make_entry(0, name='Milk today')
    make_entry(3, name='Cheese')
    make_entry(20, name='Pasta')
    return store
