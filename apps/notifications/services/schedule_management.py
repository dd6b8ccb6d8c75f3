"""
Notification schedule service.

Handles schedule CRUD and decides which schedules are due.
"""

import logging
import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.notifications.models import NotificationSchedule, ScheduleType

from .exceptions import ScheduleNotFoundError, InvalidScheduleError

logger = logging.getLogger(__name__)

TIME_OF_DAY_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')

_UNSET = object()


def _validate_time_of_day(time_of_day: str) -> None:
    if not time_of_day or not TIME_OF_DAY_PATTERN.match(time_of_day):
        raise InvalidScheduleError("time_of_day must be in HH:MM format")


def _resolve_day_of_week(schedule_type: str, day_of_week: Optional[int]) -> Optional[int]:
    """Weekly schedules need a weekday (0 = Sunday); daily ones drop it."""
    if schedule_type != ScheduleType.WEEKLY:
        return None
    if day_of_week is None or not 0 <= day_of_week <= 6:
        raise InvalidScheduleError("Weekly schedules need day_of_week between 0 (Sunday) and 6")
    return day_of_week


def create_schedule(
    *,
    device_id: str,
    schedule_type: str,
    time_of_day: str,
    day_of_week: Optional[int] = None,
    enabled: bool = True
) -> NotificationSchedule:
    """
    Create a reminder schedule for a device.

    Raises:
        InvalidScheduleError: If time or weekday is invalid
    """
    if schedule_type not in ScheduleType.values:
        raise InvalidScheduleError(f"Unknown schedule type: {schedule_type}")
    _validate_time_of_day(time_of_day)

    schedule = NotificationSchedule.objects.create(
        device_id=device_id,
        schedule_type=schedule_type,
        day_of_week=_resolve_day_of_week(schedule_type, day_of_week),
        time_of_day=time_of_day,
        enabled=enabled,
    )

    logger.info("Notification schedule %s created for device %s", schedule.id, device_id)
    return schedule


def list_schedules(*, device_id: str) -> QuerySet[NotificationSchedule]:
    """Get a device's schedules, oldest first."""
    return NotificationSchedule.objects.filter(device_id=device_id).order_by('created_at')


@transaction.atomic
def update_schedule(
    *,
    schedule_id: UUID,
    enabled: Optional[bool] = None,
    time_of_day: Optional[str] = None,
    day_of_week=_UNSET
) -> NotificationSchedule:
    """
    Change the supplied fields of a schedule.

    Raises:
        ScheduleNotFoundError: If schedule doesn't exist
        InvalidScheduleError: If the new time or weekday is invalid
    """
    try:
        schedule = NotificationSchedule.objects.select_for_update().get(id=schedule_id)
    except NotificationSchedule.DoesNotExist:
        raise ScheduleNotFoundError(f"Schedule with ID {schedule_id} not found")

    if enabled is not None:
        schedule.enabled = enabled

    if time_of_day is not None:
        _validate_time_of_day(time_of_day)
        schedule.time_of_day = time_of_day

    if day_of_week is not _UNSET:
        schedule.day_of_week = _resolve_day_of_week(schedule.schedule_type, day_of_week)

    schedule.save()

    logger.info("Notification schedule %s updated", schedule.id)
    return schedule


@transaction.atomic
def delete_schedule(*, schedule_id: UUID) -> None:
    """
    Raises:
        ScheduleNotFoundError: If schedule doesn't exist
    """
    deleted, _ = NotificationSchedule.objects.filter(id=schedule_id).delete()
    if not deleted:
        raise ScheduleNotFoundError(f"Schedule with ID {schedule_id} not found")

    logger.info("Notification schedule %s deleted", schedule_id)


def is_schedule_due(schedule: NotificationSchedule, now: Optional[datetime] = None) -> bool:
    """
    True when an enabled schedule fires in the hour containing ``now``.

    ``now`` is compared in the configured local time zone.
    """
    if not schedule.enabled:
        return False

    now = timezone.localtime(now) if now is not None else timezone.localtime()
    match = TIME_OF_DAY_PATTERN.match(schedule.time_of_day or '')
    if not match or int(match.group(1)) != now.hour:
        return False

    if schedule.schedule_type == ScheduleType.WEEKLY:
        # isoweekday: Monday = 1 .. Sunday = 7
        return schedule.day_of_week == now.isoweekday() % 7

    return True


def get_due_schedules(now: Optional[datetime] = None) -> list[NotificationSchedule]:
    """Enabled schedules that fire in the current hour."""
    return [
        schedule
        for schedule in NotificationSchedule.objects.filter(enabled=True)
        if is_schedule_due(schedule, now)
    ]
