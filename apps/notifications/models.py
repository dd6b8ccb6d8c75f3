# ==========================================
# apps/notifications/models.py
# ==========================================

from django.core.validators import MaxValueValidator, RegexValidator
from django.db import models
import uuid


TIME_OF_DAY_VALIDATOR = RegexValidator(
    regex=r'^([01]\d|2[0-3]):[0-5]\d$',
    message='Time must be in HH:MM format'
)


class Platform(models.TextChoices):
    IOS = 'ios', 'iOS'
    ANDROID = 'android', 'Android'


class ScheduleType(models.TextChoices):
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'


class PushToken(models.Model):
    """Expo push token of a device; one per device."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_id = models.CharField(max_length=255, unique=True)
    expo_push_token = models.CharField(max_length=255)
    platform = models.CharField(max_length=10, choices=Platform.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'push_tokens'

    def __str__(self):
        return f"{self.device_id} ({self.platform})"


class NotificationSchedule(models.Model):
    """
    When a device wants its expiration reminders.

    ``day_of_week`` uses 0 = Sunday .. 6 = Saturday and is only set for
    weekly schedules.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_id = models.CharField(max_length=255, db_index=True)
    schedule_type = models.CharField(max_length=10, choices=ScheduleType.choices)
    day_of_week = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(6)]
    )
    time_of_day = models.CharField(max_length=5, validators=[TIME_OF_DAY_VALIDATOR])
    enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'notification_schedules'
        ordering = ['created_at']

    def __str__(self):
        when = self.time_of_day
        if self.schedule_type == ScheduleType.WEEKLY:
            when = f"day {self.day_of_week} {when}"
        return f"{self.device_id}: {self.schedule_type} at {when}"
