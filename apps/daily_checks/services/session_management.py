"""
Daily check session service.

A session freezes the store's worklist when it starts: every entry whose
status for the session's ``warning_days`` is expired or expiring soon,
soonest expiring first. Later changes to entries do not reshape it.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.daily_checks.models import DailyCheckSession, DailyCheckItem, SessionStatus
from apps.products.models import ProductEntry
from apps.products.services import needs_attention, today
from apps.stores.models import Store, StoreMember

from .exceptions import (
    SessionNotFoundError,
    StoreNotFoundError,
    SessionNotInProgressError,
    InvalidWarningDaysError,
    NotStoreMemberError,
)

logger = logging.getLogger(__name__)


def validate_warning_days(warning_days: int) -> None:
    """
    Raises:
        InvalidWarningDaysError: If outside the configured range
    """
    low = settings.DAILY_CHECK_MIN_WARNING_DAYS
    high = settings.DAILY_CHECK_MAX_WARNING_DAYS
    if warning_days is None or not low <= warning_days <= high:
        raise InvalidWarningDaysError(f"warning_days must be between {low} and {high}")


def get_store_member(*, store_id: UUID, member_id: UUID) -> StoreMember:
    """
    Raises:
        NotStoreMemberError: If the member does not belong to the store
    """
    try:
        return StoreMember.objects.get(id=member_id, store_id=store_id)
    except StoreMember.DoesNotExist:
        raise NotStoreMemberError("Member does not belong to this store")


@transaction.atomic
def start_session(
    *,
    store_id: UUID,
    member_id: UUID,
    warning_days: Optional[int] = None,
    reference_date: Optional[date] = None
) -> DailyCheckSession:
    """
    Start a daily check and freeze its worklist.

    Args:
        store_id: Store to check
        member_id: StoreMember starting the check
        warning_days: Expiring-soon window for this check (1-30)
        reference_date: "today" for the worklist, defaults to the current date

    Returns:
        Created DailyCheckSession with its DailyCheckItems

    Raises:
        InvalidWarningDaysError: If warning_days is out of range
        StoreNotFoundError: If store doesn't exist
        NotStoreMemberError: If member is not in the store
    """
    if warning_days is None:
        warning_days = settings.DAILY_CHECK_DEFAULT_WARNING_DAYS
    validate_warning_days(warning_days)

    try:
        store = Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    member = get_store_member(store_id=store.id, member_id=member_id)
    reference = reference_date or today()

    session = DailyCheckSession.objects.create(
        store=store,
        started_by=member,
        warning_days=warning_days,
        reference_date=reference,
    )

    entries = (
        ProductEntry.objects
        .filter(store=store)
        .order_by('expiration_date', 'created_at')
    )
    worklist = [
        entry for entry in entries
        if needs_attention(entry.expiration_date, reference, warning_days)
    ]
    DailyCheckItem.objects.bulk_create([
        DailyCheckItem(session=session, entry=entry, position=position)
        for position, entry in enumerate(worklist, start=1)
    ])

    logger.info(
        "Daily check %s started for store %s by member %s (%d items, warning_days=%d)",
        session.id, store.id, member.id, len(worklist), warning_days
    )
    return session


def get_session(*, session_id: UUID) -> DailyCheckSession:
    """
    Raises:
        SessionNotFoundError: If session doesn't exist
    """
    try:
        return (
            DailyCheckSession.objects
            .select_related('store', 'started_by')
            .get(id=session_id)
        )
    except DailyCheckSession.DoesNotExist:
        raise SessionNotFoundError(f"Session with ID {session_id} not found")


def list_store_sessions(*, store_id: UUID) -> QuerySet[DailyCheckSession]:
    """Get a store's daily checks, newest first."""
    return (
        DailyCheckSession.objects
        .filter(store_id=store_id)
        .select_related('started_by')
        .order_by('-started_at')
    )


def get_worklist(*, session_id: UUID) -> list[ProductEntry]:
    """
    Get the entries still waiting for an action, in worklist order.

    An empty list means every item has been handled.

    Raises:
        SessionNotFoundError: If session doesn't exist
    """
    if not DailyCheckSession.objects.filter(id=session_id).exists():
        raise SessionNotFoundError(f"Session with ID {session_id} not found")

    items = (
        DailyCheckItem.objects
        .filter(session_id=session_id, action__isnull=True, entry__isnull=False)
        .select_related('entry', 'entry__product', 'entry__created_by_member')
        .order_by('position')
    )
    return [item.entry for item in items]


def count_remaining(*, session_id: UUID) -> int:
    """Number of worklist items without an action."""
    return DailyCheckItem.objects.filter(
        session_id=session_id, action__isnull=True, entry__isnull=False
    ).count()


@transaction.atomic
def complete_session(*, session_id: UUID) -> DailyCheckSession:
    """
    Mark a daily check completed.

    Raises:
        SessionNotFoundError: If session doesn't exist
        SessionNotInProgressError: If session is already completed
    """
    try:
        session = DailyCheckSession.objects.select_for_update().get(id=session_id)
    except DailyCheckSession.DoesNotExist:
        raise SessionNotFoundError(f"Session with ID {session_id} not found")

    if not session.is_in_progress:
        logger.warning("Daily check %s completed twice", session_id)
        raise SessionNotInProgressError("Session is already completed")

    session.status = SessionStatus.COMPLETED
    session.completed_at = timezone.now()
    session.save(update_fields=['status', 'completed_at'])

    logger.info("Daily check %s completed", session.id)
    return session
