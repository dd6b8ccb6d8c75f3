"""
Store code service.

Generates human-shareable store codes, regenerates them and renders them
as QR codes for sharing.
"""

import logging
import secrets
from io import BytesIO
from typing import Optional
from uuid import UUID

import qrcode
from django.conf import settings
from django.db import transaction

from apps.stores.models import Store

from .exceptions import (
    StoreNotFoundError,
    InsufficientPermissionsError,
    StoreCodeGenerationError,
)

logger = logging.getLogger(__name__)


def generate_store_code() -> str:
    """
    Generate a candidate store code such as ``KM7-Q2XD``.

    The alphabet and the group lengths come from ``STORE_CODE_ALPHABET``
    and ``STORE_CODE_GROUPS``. Uniqueness is not checked here.
    """
    alphabet = settings.STORE_CODE_ALPHABET
    return '-'.join(
        ''.join(secrets.choice(alphabet) for _ in range(length))
        for length in settings.STORE_CODE_GROUPS
    )


def normalize_store_code(code: str) -> str:
    """Store codes are matched case-insensitively."""
    return code.strip().upper()


def find_unique_store_code(max_attempts: Optional[int] = None) -> str:
    """
    Generate a store code not used by any store.

    Candidate codes are checked against the database and regenerated on
    collision, up to ``max_attempts`` candidates.

    Raises:
        StoreCodeGenerationError: If every candidate collided
    """
    if max_attempts is None:
        max_attempts = settings.STORE_CODE_MAX_ATTEMPTS

    for attempt in range(max_attempts):
        code = generate_store_code()
        if not Store.objects.filter(code=code).exists():
            return code
        logger.info("Store code collision on attempt %d", attempt + 1)

    logger.error("Failed to generate unique store code after %d attempts", max_attempts)
    raise StoreCodeGenerationError(
        f"Failed to generate unique store code after {max_attempts} attempts"
    )


@transaction.atomic
def regenerate_store_code(*, store_id: UUID, device_id: str) -> str:
    """
    Replace a store's code (owner only).

    Existing members are unaffected; the old code stops working.

    Raises:
        StoreNotFoundError: If store doesn't exist
        InsufficientPermissionsError: If device is not the owner
        StoreCodeGenerationError: If no unique code could be generated
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    if not store.is_owner(device_id):
        raise InsufficientPermissionsError("Only the store owner can regenerate the store code")

    store.code = find_unique_store_code()
    store.save(update_fields=['code', 'updated_at'])

    logger.info("Store %s code regenerated by device %s", store.id, device_id)
    return store.code


def render_store_code_qr(*, store: Store) -> bytes:
    """
    Render the store code as a PNG QR code.

    The QR code uses error correction level M, which scans reliably from
    a phone screen.
    """
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(store.code)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
