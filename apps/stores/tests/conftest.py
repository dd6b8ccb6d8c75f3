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
def owner_device():
    return 'owner-device'


@pytest.fixture
def member_device():
    return 'member-device'


@pytest.fixture
def other_device():
    """A device that belongs to no store."""
    return 'other-device'


@pytest.fixture
def store(db, owner_device):
    """Create a store with its owner membership."""
    store = Store.objects.create(
        name='Corner Shop',
        code='ABC-2345',
        created_by_device_id=owner_device,
    )
    StoreMember.objects.create(
        store=store,
        device_id=owner_device,
        nickname='Anna',
        role=StoreRole.OWNER,
    )
    return store


@pytest.fixture
def store_with_member(store, member_device):
    """Store with an owner and one regular member."""
    StoreMember.objects.create(
        store=store,
        device_id=member_device,
        nickname='Ben',
        role=StoreRole.MEMBER,
    )
    return store


@pytest.fixture
def store_entry(store):
    """Entry belonging to the store."""
    product = Product.objects.create(barcode='4001', name='Eggs')
    return ProductEntry.objects.create(
        product=product,
        barcode=product.barcode,
        product_name=product.name,
        expiration_date=timezone.localdate() + timedelta(days=3),
        store=store,
        created_by_member=store.members.first(),
    )
