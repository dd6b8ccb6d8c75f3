"""
Batches app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    BatchesServiceError,
    BatchNotFoundError,
    BatchNotInProgressError,
    InvalidBatchItemError,
)

from .batch_management import (
    create_batch,
    get_batch,
    list_device_batches,
    add_item,
    get_batch_items,
    delete_batch,
)

from .batch_completion import (
    complete_batch,
)


__all__ = [
    # Exceptions
    'BatchesServiceError',
    'BatchNotFoundError',
    'BatchNotInProgressError',
    'InvalidBatchItemError',

    # Batch Management
    'create_batch',
    'get_batch',
    'list_device_batches',
    'add_item',
    'get_batch_items',
    'delete_batch',

    # Completion
    'complete_batch',
]
