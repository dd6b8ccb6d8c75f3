# ==========================================
# apps/daily_checks/admin.py
# ==========================================

from django.contrib import admin
from apps.daily_checks.models import DailyCheckSession, DailyCheckItem


class DailyCheckItemInline(admin.TabularInline):
    """Inline admin for worklist items."""
    model = DailyCheckItem
    extra = 0
    fields = ['position', 'entry', 'action', 'performed_by', 'performed_at']
    readonly_fields = ['position', 'entry', 'action', 'performed_by', 'performed_at']


@admin.register(DailyCheckSession)
class DailyCheckSessionAdmin(admin.ModelAdmin):
    """Admin interface for daily checks."""

    list_display = [
        'store',
        'reference_date',
        'warning_days',
        'status',
        'total_checked',
        'total_sold',
        'total_discarded',
        'started_at'
    ]
    list_filter = ['status', 'reference_date']
    search_fields = ['store__name', 'store__code']
    readonly_fields = [
        'total_checked',
        'total_discounted',
        'total_sold',
        'total_discarded',
        'total_skipped',
        'started_at',
        'completed_at',
    ]
    raw_id_fields = ['store', 'started_by']
    inlines = [DailyCheckItemInline]
    date_hierarchy = 'started_at'
    ordering = ['-started_at']
