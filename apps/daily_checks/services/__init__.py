"""
Daily checks app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    DailyChecksServiceError,
    SessionNotFoundError,
    StoreNotFoundError,
    WorklistItemNotFoundError,
    SessionNotInProgressError,
    ItemAlreadyProcessedError,
    InvalidWarningDaysError,
    InvalidActionError,
    NotStoreMemberError,
)

from .session_management import (
    start_session,
    get_session,
    list_store_sessions,
    get_worklist,
    count_remaining,
    complete_session,
)

from .check_actions import (
    record_action,
)


__all__ = [
    # Exceptions
    'DailyChecksServiceError',
    'SessionNotFoundError',
    'StoreNotFoundError',
    'WorklistItemNotFoundError',
    'SessionNotInProgressError',
    'ItemAlreadyProcessedError',
    'InvalidWarningDaysError',
    'InvalidActionError',
    'NotStoreMemberError',

    # Sessions
    'start_session',
    'get_session',
    'list_store_sessions',
    'get_worklist',
    'count_remaining',
    'complete_session',

    # Actions
    'record_action',
]
