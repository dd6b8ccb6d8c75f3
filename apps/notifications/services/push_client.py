"""
Expo push transport.

The only place that talks to the Expo push service. Delivery problems are
logged and reported as ``False``; they never propagate to callers.
"""

import logging
from typing import Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

EXPO_HEADERS = {
    'Accept': 'application/json',
    'Accept-Encoding': 'gzip, deflate',
    'Content-Type': 'application/json',
}


def send_push_notification(
    token: str,
    title: str,
    body: str,
    data: Optional[dict] = None
) -> bool:
    """
    Send one push message through Expo.

    Args:
        token: Expo push token of the device
        title: Notification title
        body: Notification text
        data: Extra payload delivered to the app

    Returns:
        True when Expo accepted the message, False otherwise
    """
    message = {
        'to': token,
        'sound': 'default',
        'title': title,
        'body': body,
        'data': data or {},
    }

    try:
        resp = requests.post(
            settings.EXPO_PUSH_URL,
            json=message,
            headers=EXPO_HEADERS,
            timeout=settings.PUSH_REQUEST_TIMEOUT,
        )
    except requests.RequestException:
        logger.exception("Push delivery to %s failed", token)
        return False

    if not resp.ok:
        logger.warning("Expo rejected push to %s: HTTP %s", token, resp.status_code)
        return False

    try:
        ticket = resp.json().get('data') or {}
    except ValueError:
        logger.warning("Expo returned a non-JSON response for %s", token)
        return False

    # A single message yields a single ticket; a list only appears for batches
    if isinstance(ticket, list):
        ticket = ticket[0] if ticket else {}

    if ticket.get('status') == 'error':
        logger.warning("Expo push ticket error for %s: %s", token, ticket.get('message'))
        return False

    return True
