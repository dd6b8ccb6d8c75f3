"""
Stores app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
    InvalidStoreCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
    StoreCodeGenerationError,
)

from .store_management import (
    create_store,
    delete_store,
    get_store_by_id,
    get_device_stores,
    get_store_entries,
)

from .membership_management import (
    join_store,
    leave_store,
    get_store_members,
    get_current_store,
)

from .invite_management import (
    generate_store_code,
    regenerate_store_code,
    render_store_code_qr,
)


__all__ = [
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',
    'InvalidStoreCodeError',
    'AlreadyMemberError',
    'NotMemberError',
    'OwnerCannotLeaveError',
    'InsufficientPermissionsError',
    'StoreCodeGenerationError',

    # Store Management
    'create_store',
    'delete_store',
    'get_store_by_id',
    'get_device_stores',
    'get_store_entries',

    # Membership Management
    'join_store',
    'leave_store',
    'get_store_members',
    'get_current_store',

    # Store Codes
    'generate_store_code',
    'regenerate_store_code',
    'render_store_code_qr',
]
