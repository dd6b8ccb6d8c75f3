"""
Expiration status classifier.

Single source of truth for turning an expiration date into
``fresh`` / ``expiring_soon`` / ``expired``. Entry writes, batch
completion, stats, status filters, daily-check worklists and reminders
all classify through :func:`classify`.

Rule (with ``days = expiration - today`` in whole calendar days):

    days < 0                  -> expired
    0 <= days <= warning_days -> expiring_soon   (expires today included)
    days > warning_days       -> fresh
"""

from datetime import date, datetime
from typing import Optional

from django.conf import settings
from django.utils import timezone

from apps.products.models import EntryStatus


def _as_date(value) -> date:
    # Time of day never matters; a datetime counts as its calendar date
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def today() -> date:
    """Current calendar date in the configured time zone."""
    return timezone.localdate()


def days_until_expiry(expiration_date, reference_date=None) -> int:
    """Whole days from ``reference_date`` (default today) to expiration."""
    reference = _as_date(reference_date) if reference_date is not None else today()
    return (_as_date(expiration_date) - reference).days


def classify(
    expiration_date,
    reference_date=None,
    warning_days: Optional[int] = None
) -> str:
    """
    Classify an expiration date relative to ``reference_date``.

    Args:
        expiration_date: date or datetime the product expires
        reference_date: "today"; defaults to the current local date
        warning_days: size of the expiring-soon window, defaults to
            ``settings.EXPIRING_SOON_DAYS``

    Returns:
        One of the ``EntryStatus`` values
    """
    if warning_days is None:
        warning_days = settings.EXPIRING_SOON_DAYS

    days = days_until_expiry(expiration_date, reference_date)

    if days < 0:
        return EntryStatus.EXPIRED.value
    if days <= warning_days:
        return EntryStatus.EXPIRING_SOON.value
    return EntryStatus.FRESH.value


def needs_attention(
    expiration_date,
    reference_date=None,
    warning_days: Optional[int] = None
) -> bool:
    """True when the entry is expired or expiring within ``warning_days``."""
    return classify(expiration_date, reference_date, warning_days) != EntryStatus.FRESH
