"""
Store management service.

Handles store CRUD operations with proper transaction safety.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Count

from apps.stores.models import Store, StoreMember, StoreRole

from .exceptions import (
    StoreNotFoundError,
    InsufficientPermissionsError,
    StoreCodeGenerationError,
)
from .invite_management import find_unique_store_code

logger = logging.getLogger(__name__)


def create_store(
    *,
    name: str,
    nickname: str,
    device_id: str,
) -> Store:
    """
    Create a new store and add the creating device as owner.

    This is a multi-step operation wrapped in a transaction:
    1. Generate a unique store code (bounded retries)
    2. Create the store
    3. Create owner membership

    Args:
        name: Store name
        nickname: Creator's nickname inside the store
        device_id: Creating device

    Returns:
        Created Store instance

    Raises:
        StoreCodeGenerationError: If no unique store code could be generated
    """
    code = find_unique_store_code()

    try:
        with transaction.atomic():
            store = Store.objects.create(
                name=name,
                code=code,
                created_by_device_id=device_id,
            )

            StoreMember.objects.create(
                store=store,
                device_id=device_id,
                nickname=nickname,
                role=StoreRole.OWNER,
            )
    except IntegrityError:
        # Another store took the same code between the check and the insert
        logger.error("Store code %s was claimed concurrently", code)
        raise StoreCodeGenerationError("Failed to generate unique store code")

    logger.info("Store %s created with code %s by device %s", store.id, store.code, device_id)
    return store


def get_store_by_id(*, store_id: UUID) -> Store:
    """
    Get a store by ID.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        return Store.objects.prefetch_related('members').get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")


@transaction.atomic
def delete_store(*, store_id: UUID, device_id: str) -> None:
    """
    Delete a store (owner only).

    Cascading deletes remove all memberships; entries, batches keep
    existing with their store reference cleared.

    Args:
        store_id: UUID of the store
        device_id: Device requesting deletion (must be owner)

    Raises:
        StoreNotFoundError: If store doesn't exist
        InsufficientPermissionsError: If device is not the owner
    """
    try:
        store = (
            Store.objects
            .select_for_update()
            .get(id=store_id)
        )
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if not store.is_owner(device_id):
        logger.warning("Device %s tried to delete store %s without being owner", device_id, store_id)
        raise InsufficientPermissionsError("Only the store owner can delete the store")

    store.delete()
    logger.info("Store %s deleted by device %s", store_id, device_id)


def get_device_stores(*, device_id: str) -> list[dict]:
    """
    Get every store a device belongs to, with its role and member count.

    Returns:
        List of dicts with store, role, member_id, nickname, member_count
    """
    memberships = (
        StoreMember.objects
        .filter(device_id=device_id)
        .select_related('store')
        .annotate(member_count=Count('store__members'))
        .order_by('-joined_at')
    )

    return [
        {
            'id': membership.store.id,
            'name': membership.store.name,
            'code': membership.store.code,
            'role': membership.role,
            'member_id': membership.id,
            'nickname': membership.nickname,
            'member_count': membership.member_count,
            'created_at': membership.store.created_at,
        }
        for membership in memberships
    ]


def get_store_entries(*, store_id: UUID) -> list:
    """
    Get a store's product entries, soonest expiring first.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    from apps.products.services import list_entries

    if not Store.objects.filter(id=store_id).exists():
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    return list_entries(store_id=store_id)
