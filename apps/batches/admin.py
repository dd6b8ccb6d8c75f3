# ==========================================
# apps/batches/admin.py
# ==========================================

from django.contrib import admin
from apps.batches.models import BatchScan, BatchScanItem


class BatchScanItemInline(admin.TabularInline):
    """Inline admin for staged items."""
    model = BatchScanItem
    extra = 0
    fields = ['position', 'barcode', 'product_name', 'expiration_date', 'quantity']
    readonly_fields = ['position']


@admin.register(BatchScan)
class BatchScanAdmin(admin.ModelAdmin):
    """Admin interface for batch scans."""

    list_display = ['name', 'device_id', 'status', 'item_count', 'store', 'created_at', 'completed_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'device_id']
    readonly_fields = ['item_count', 'created_at', 'completed_at']
    raw_id_fields = ['store', 'created_by_member']
    inlines = [BatchScanItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
