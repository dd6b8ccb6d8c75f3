"""
Push token service.
"""

import logging

from django.db import transaction

from apps.notifications.models import PushToken

from .exceptions import PushTokenNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def register_push_token(*, device_id: str, expo_push_token: str, platform: str) -> tuple[PushToken, bool]:
    """
    Store or replace the push token of a device.

    Returns:
        Tuple of (PushToken, created)
    """
    token, created = PushToken.objects.select_for_update().update_or_create(
        device_id=device_id,
        defaults={
            'expo_push_token': expo_push_token,
            'platform': platform,
        }
    )

    logger.info("Push token %s for device %s (%s)", 'registered' if created else 'updated', device_id, platform)
    return token, created


def get_push_token(*, device_id: str) -> PushToken:
    """
    Raises:
        PushTokenNotFoundError: If the device never registered a token
    """
    try:
        return PushToken.objects.get(device_id=device_id)
    except PushToken.DoesNotExist:
        raise PushTokenNotFoundError(f"No push token registered for device {device_id}")
