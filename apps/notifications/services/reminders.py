"""
Expiration reminder service.

Sends one push message per entry of a device that is expiring soon today.
"""

import logging
from datetime import date
from typing import Optional

from apps.products.models import EntryStatus
from apps.products.services import list_entries

from .push_client import send_push_notification
from .token_management import get_push_token

logger = logging.getLogger(__name__)


def send_expiration_reminders(*, device_id: str, reference_date: Optional[date] = None) -> int:
    """
    Remind a device of its entries that are expiring soon.

    Entries are selected by their current classification, not by the
    cached status column. Each delivery is independent; a failed one is
    logged by the transport and not counted.

    Args:
        device_id: Device whose scanned entries are checked
        reference_date: "today", defaults to the current date

    Returns:
        Number of notifications Expo accepted

    Raises:
        PushTokenNotFoundError: If the device has no push token
    """
    token = get_push_token(device_id=device_id)

    entries = list_entries(
        device_id=device_id,
        status=EntryStatus.EXPIRING_SOON,
        reference_date=reference_date,
    )

    sent = 0
    for entry in entries:
        delivered = send_push_notification(
            token.expo_push_token,
            'Product Expiring Soon',
            f"{entry.product_name} expires on {entry.expiration_date.isoformat()}",
            {
                'entry_id': str(entry.id),
                'expiration_date': entry.expiration_date.isoformat(),
            },
        )
        if delivered:
            sent += 1

    logger.info("Sent %d of %d expiration reminders to device %s", sent, len(entries), device_id)
    return sent
