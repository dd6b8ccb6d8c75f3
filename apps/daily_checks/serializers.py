from django.conf import settings
from rest_framework import serializers

from .models import DailyCheckSession, DailyCheckItem, CheckAction


class DailyCheckSessionSerializer(serializers.ModelSerializer):
    """Daily check session with its counters."""

    store_id = serializers.UUIDField(read_only=True)
    started_by_id = serializers.UUIDField(read_only=True, allow_null=True)
    started_by_nickname = serializers.SerializerMethodField()
    total_items = serializers.SerializerMethodField()
    remaining_count = serializers.SerializerMethodField()

    class Meta:
        model = DailyCheckSession
        fields = [
            'id',
            'store_id',
            'started_by_id',
            'started_by_nickname',
            'warning_days',
            'reference_date',
            'status',
            'total_items',
            'remaining_count',
            'total_checked',
            'total_discounted',
            'total_sold',
            'total_discarded',
            'total_skipped',
            'started_at',
            'completed_at',
        ]
        read_only_fields = fields

    def get_started_by_nickname(self, obj):
        return obj.started_by.nickname if obj.started_by else None

    def get_total_items(self, obj):
        return obj.items.count()

    def get_remaining_count(self, obj):
        return obj.items.filter(action__isnull=True, entry__isnull=False).count()


class StartSessionSerializer(serializers.Serializer):
    """Input for starting a daily check."""

    store_id = serializers.UUIDField()
    member_id = serializers.UUIDField()
    warning_days = serializers.IntegerField(required=False)

    def validate_warning_days(self, value):
        low = settings.DAILY_CHECK_MIN_WARNING_DAYS
        high = settings.DAILY_CHECK_MAX_WARNING_DAYS
        if not low <= value <= high:
            raise serializers.ValidationError(f"Must be between {low} and {high}")
        return value


class RecordActionSerializer(serializers.Serializer):
    """Input for recording an action on a worklist entry."""

    session_id = serializers.UUIDField()
    entry_id = serializers.UUIDField()
    action = serializers.ChoiceField(choices=CheckAction.choices)
    member_id = serializers.UUIDField()


class DailyCheckItemSerializer(serializers.ModelSerializer):
    """Processed worklist item."""

    session_id = serializers.UUIDField(read_only=True)
    entry_id = serializers.UUIDField(read_only=True, allow_null=True)
    performed_by_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = DailyCheckItem
        fields = ['id', 'session_id', 'entry_id', 'position', 'action', 'performed_by_id', 'performed_at']
        read_only_fields = fields


class RecordActionResponseSerializer(serializers.Serializer):
    item = DailyCheckItemSerializer()
    remaining_count = serializers.IntegerField()


class ErrorResponseSerializer(serializers.Serializer):
    """Error response shape."""
    error = serializers.CharField()
