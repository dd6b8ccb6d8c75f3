# ==========================================
# apps/notifications/admin.py
# ==========================================

from django.contrib import admin
from apps.notifications.models import PushToken, NotificationSchedule


@admin.register(PushToken)
class PushTokenAdmin(admin.ModelAdmin):
    """Admin interface for push tokens."""

    list_display = ['device_id', 'platform', 'updated_at']
    list_filter = ['platform']
    search_fields = ['device_id', 'expo_push_token']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(NotificationSchedule)
class NotificationScheduleAdmin(admin.ModelAdmin):
    """Admin interface for reminder schedules."""

    list_display = ['device_id', 'schedule_type', 'day_of_week', 'time_of_day', 'enabled']
    list_filter = ['schedule_type', 'enabled']
    search_fields = ['device_id']
    readonly_fields = ['created_at', 'updated_at']
