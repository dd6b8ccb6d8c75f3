"""
Daily check action service.

Records what was done with each worklist entry. Actions are an audit
trail only: the product entry itself is left unchanged.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.daily_checks.models import DailyCheckSession, DailyCheckItem, CheckAction

from .exceptions import (
    SessionNotFoundError,
    SessionNotInProgressError,
    WorklistItemNotFoundError,
    ItemAlreadyProcessedError,
    InvalidActionError,
)
from .session_management import get_store_member, count_remaining

logger = logging.getLogger(__name__)

COUNTER_FIELDS = {
    CheckAction.CHECKED: 'total_checked',
    CheckAction.DISCOUNTED: 'total_discounted',
    CheckAction.SOLD: 'total_sold',
    CheckAction.DISCARDED: 'total_discarded',
    CheckAction.SKIPPED: 'total_skipped',
}


@transaction.atomic
def record_action(
    *,
    session_id: UUID,
    entry_id: UUID,
    action: str,
    member_id: UUID
) -> tuple[DailyCheckItem, int]:
    """
    Record the action taken on a worklist entry.

    Locks the session row so the matching counter and the item are
    updated together.

    Args:
        session_id: UUID of the session
        entry_id: UUID of the product entry on the worklist
        action: checked, discounted, sold, discarded or skipped
        member_id: StoreMember performing the action

    Returns:
        Tuple of (updated DailyCheckItem, number of items left)

    Raises:
        InvalidActionError: If action is unknown
        SessionNotFoundError: If session doesn't exist
        SessionNotInProgressError: If session is completed
        NotStoreMemberError: If member is not in the session's store
        WorklistItemNotFoundError: If entry is not on the worklist
        ItemAlreadyProcessedError: If the entry already has an action
    """
    if action not in CheckAction.values:
        raise InvalidActionError(f"Unknown action: {action}")

    try:
        session = DailyCheckSession.objects.select_for_update().get(id=session_id)
    except DailyCheckSession.DoesNotExist:
        raise SessionNotFoundError(f"Session with ID {session_id} not found")

    if not session.is_in_progress:
        raise SessionNotInProgressError("Session is already completed")

    member = get_store_member(store_id=session.store_id, member_id=member_id)

    try:
        item = DailyCheckItem.objects.select_for_update().get(session=session, entry_id=entry_id)
    except DailyCheckItem.DoesNotExist:
        raise WorklistItemNotFoundError(f"Entry {entry_id} is not on this session's worklist")

    if item.action:
        raise ItemAlreadyProcessedError(f"Entry {entry_id} was already {item.action}")

    item.action = action
    item.performed_by = member
    item.performed_at = timezone.now()
    item.save(update_fields=['action', 'performed_by', 'performed_at'])

    counter = COUNTER_FIELDS[action]
    DailyCheckSession.objects.filter(id=session.id).update(**{counter: F(counter) + 1})

    remaining = count_remaining(session_id=session.id)
    logger.info(
        "Entry %s %s in daily check %s by member %s (%d left)",
        entry_id, action, session.id, member.id, remaining
    )
    return item, remaining
