# ==========================================
# apps/stores/admin.py
# ==========================================

from django.contrib import admin
from apps.stores.models import Store, StoreMember


class StoreMemberInline(admin.TabularInline):
    """Inline admin for store members."""
    model = StoreMember
    extra = 0
    fields = ['nickname', 'device_id', 'role', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """Admin interface for Stores."""

    list_display = ['name', 'code', 'member_count', 'created_by_device_id', 'created_at']
    search_fields = ['name', 'code', 'created_by_device_id']
    readonly_fields = ['code', 'created_at', 'updated_at']
    inlines = [StoreMemberInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.members.count()
    member_count.short_description = 'Members'


@admin.register(StoreMember)
class StoreMemberAdmin(admin.ModelAdmin):
    """Admin interface for store members."""

    list_display = ['nickname', 'store', 'device_id', 'role', 'joined_at']
    list_filter = ['role', 'joined_at']
    search_fields = ['nickname', 'device_id', 'store__name', 'store__code']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']
