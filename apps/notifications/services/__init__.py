"""
Notifications app services layer.

Push tokens, reminder schedules and expiration reminders delivered
through the Expo push service.
"""

from .exceptions import (
    NotificationsServiceError,
    PushTokenNotFoundError,
    ScheduleNotFoundError,
    InvalidScheduleError,
)

from .push_client import (
    send_push_notification,
)

from .token_management import (
    register_push_token,
    get_push_token,
)

from .schedule_management import (
    create_schedule,
    list_schedules,
    update_schedule,
    delete_schedule,
    is_schedule_due,
    get_due_schedules,
)

from .reminders import (
    send_expiration_reminders,
)


__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'PushTokenNotFoundError',
    'ScheduleNotFoundError',
    'InvalidScheduleError',

    # Transport
    'send_push_notification',

    # Tokens
    'register_push_token',
    'get_push_token',

    # Schedules
    'create_schedule',
    'list_schedules',
    'update_schedule',
    'delete_schedule',
    'is_schedule_due',
    'get_due_schedules',

    # Reminders
    'send_expiration_reminders',
]
