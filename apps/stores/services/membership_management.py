"""
Membership management service.

Handles store membership operations with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.stores.models import Store, StoreMember, StoreRole

from .exceptions import (
    StoreNotFoundError,
    InvalidStoreCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
)
from .invite_management import normalize_store_code

logger = logging.getLogger(__name__)


@transaction.atomic
def join_store(
    *,
    code: str,
    nickname: str,
    device_id: str
) -> tuple[Store, StoreMember]:
    """
    Join a store using its store code.

    Uses row-level locking to prevent race conditions when checking
    and creating memberships.

    Args:
        code: Store code (case-insensitive)
        nickname: Nickname for the device inside the store
        device_id: Device joining the store

    Returns:
        Tuple of (Store, created StoreMember)

    Raises:
        InvalidStoreCodeError: If no store has this code
        AlreadyMemberError: If device is already a member
    """
    normalized = normalize_store_code(code)

    try:
        store = (
            Store.objects
            .select_for_update()
            .get(code=normalized)
        )
    except Store.DoesNotExist:
        logger.warning("Join attempt with unknown store code %s by device %s", normalized, device_id)
        raise InvalidStoreCodeError("Invalid store code")

    if store.has_member(device_id):
        logger.warning("Device %s is already a member of store %s", device_id, store.id)
        raise AlreadyMemberError(f"Already a member of {store.name}")

    try:
        member = StoreMember.objects.create(
            store=store,
            device_id=device_id,
            nickname=nickname,
            role=StoreRole.MEMBER,
        )
    except IntegrityError:
        # Database constraint caught duplicate membership
        raise AlreadyMemberError(f"Already a member of {store.name}")

    logger.info("Device %s joined store %s as %s", device_id, store.id, nickname)
    return store, member


@transaction.atomic
def leave_store(*, store_id: UUID, device_id: str) -> None:
    """
    Leave a store.

    The owner cannot leave while other members remain - they must delete
    the store instead. An owner who is the last member may leave; the
    store stays, without members.

    Args:
        store_id: UUID of the store
        device_id: Device leaving the store

    Raises:
        StoreNotFoundError: If store doesn't exist
        NotMemberError: If device is not a member
        OwnerCannotLeaveError: If owner leaves while others remain
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    try:
        membership = (
            StoreMember.objects
            .select_for_update()
            .get(store=store, device_id=device_id)
        )
    except StoreMember.DoesNotExist:
        raise NotMemberError(f"Not a member of {store.name}")

    if membership.role == StoreRole.OWNER:
        others = store.members.exclude(id=membership.id).count()
        if others > 0:
            logger.warning("Owner %s tried to leave store %s with %d other members", device_id, store.id, others)
            raise OwnerCannotLeaveError(
                "Owner cannot leave the store while other members remain. Delete the store instead."
            )

    membership.delete()
    logger.info("Device %s left store %s", device_id, store.id)


def get_store_members(*, store_id: UUID) -> QuerySet[StoreMember]:
    """
    Get all members of a store, owner first.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    if not Store.objects.filter(id=store_id).exists():
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    return (
        StoreMember.objects
        .filter(store_id=store_id)
        .order_by('-role', 'joined_at')
    )


def get_current_store(*, device_id: str) -> StoreMember:
    """
    Get the device's most recent membership.

    Raises:
        NotMemberError: If the device is not linked to any store
    """
    membership = (
        StoreMember.objects
        .filter(device_id=device_id)
        .select_related('store')
        .order_by('-joined_at')
        .first()
    )
    if membership is None:
        raise NotMemberError("Device not linked to any store")
    return membership
