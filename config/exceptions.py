"""
Project-wide DRF exception handler.

Every error leaving the API has the shape ``{"error": "<message>"}``.
Serializer validation errors are flattened into a single readable message;
anything DRF does not know how to handle is logged with the view context
and left to Django's JSON 500 handler.
"""

import logging

from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten_detail(detail, prefix=''):
    """Turn nested DRF error details into 'field: message' strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            label = field if field != 'non_field_errors' else ''
            nested = f'{prefix}.{label}' if prefix and label else (label or prefix)
            messages.extend(_flatten_detail(value, nested))
        return messages

    if isinstance(detail, (list, tuple)):
        messages = []
        for value in detail:
            messages.extend(_flatten_detail(value, prefix))
        return messages

    return [f'{prefix}: {detail}' if prefix else str(detail)]


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled error in %s (kwargs=%s)",
            view.__class__.__name__ if view else 'unknown view',
            getattr(view, 'kwargs', {}),
            exc_info=exc,
        )
        return None

    if isinstance(exc, ValidationError):
        message = '; '.join(_flatten_detail(exc.detail)) or 'Invalid input'
    else:
        detail = getattr(exc, 'detail', None)
        message = '; '.join(_flatten_detail(detail)) if detail is not None else str(exc)

    response.data = {'error': message}
    return response
