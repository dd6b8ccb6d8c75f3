from rest_framework import serializers
from .models import PushToken, NotificationSchedule, Platform, ScheduleType


class PushTokenSerializer(serializers.ModelSerializer):
    """Registered push token."""

    class Meta:
        model = PushToken
        fields = ['id', 'device_id', 'expo_push_token', 'platform', 'created_at', 'updated_at']
        read_only_fields = fields


class RegisterPushTokenSerializer(serializers.Serializer):
    """Input for registering a device's push token."""

    device_id = serializers.CharField(max_length=255)
    expo_push_token = serializers.CharField(max_length=255)
    platform = serializers.ChoiceField(choices=Platform.choices)


class NotificationScheduleSerializer(serializers.ModelSerializer):
    """Reminder schedule."""

    class Meta:
        model = NotificationSchedule
        fields = [
            'id',
            'device_id',
            'schedule_type',
            'day_of_week',
            'time_of_day',
            'enabled',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ScheduleCreateSerializer(serializers.Serializer):
    """Input for creating a reminder schedule."""

    device_id = serializers.CharField(max_length=255)
    schedule_type = serializers.ChoiceField(choices=ScheduleType.choices)
    day_of_week = serializers.IntegerField(min_value=0, max_value=6, required=False, allow_null=True)
    time_of_day = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', max_length=5)
    enabled = serializers.BooleanField(default=True)


class ScheduleUpdateSerializer(serializers.Serializer):
    """Partial schedule update."""

    enabled = serializers.BooleanField(required=False)
    time_of_day = serializers.RegexField(r'^([01]\d|2[0-3]):[0-5]\d$', max_length=5, required=False)
    day_of_week = serializers.IntegerField(min_value=0, max_value=6, required=False, allow_null=True)


class SendRemindersSerializer(serializers.Serializer):
    device_id = serializers.CharField(max_length=255)


class SendRemindersResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    notifications_sent = serializers.IntegerField()


class ErrorResponseSerializer(serializers.Serializer):
    """Error response shape."""
    error = serializers.CharField()
