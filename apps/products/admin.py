# ==========================================
# apps/products/admin.py
# ==========================================

from django.contrib import admin
from apps.products.models import Product, ProductEntry, ProductImage


class ProductEntryInline(admin.TabularInline):
    """Inline admin for entries of a product."""
    model = ProductEntry
    extra = 0
    fields = ['product_name', 'expiration_date', 'quantity', 'status', 'store']
    readonly_fields = ['status']


class ProductImageInline(admin.TabularInline):
    """Inline admin for the product gallery."""
    model = ProductImage
    extra = 0
    fields = ['image_url', 'is_primary', 'uploaded_by_store', 'uploaded_by_member', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['uploaded_by_store', 'uploaded_by_member']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for catalog products."""

    list_display = ['barcode', 'name', 'category', 'entry_count', 'updated_at']
    list_filter = ['category']
    search_fields = ['barcode', 'name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductImageInline, ProductEntryInline]
    ordering = ['name']

    def entry_count(self, obj):
        """Show number of tracked entries."""
        return obj.entries.count()
    entry_count.short_description = 'Entries'


@admin.register(ProductEntry)
class ProductEntryAdmin(admin.ModelAdmin):
    """Admin interface for product entries."""

    list_display = [
        'product_name',
        'barcode',
        'expiration_date',
        'quantity',
        'status',
        'store',
        'created_at'
    ]
    list_filter = ['status', 'store', 'expiration_date']
    search_fields = ['product_name', 'barcode', 'scanned_by_device_id']
    readonly_fields = ['status', 'created_at', 'updated_at']
    raw_id_fields = ['product', 'store', 'created_by_member']
    date_hierarchy = 'expiration_date'
    ordering = ['expiration_date']

    fieldsets = (
        ('Product', {
            'fields': ('product', 'barcode', 'product_name', 'category', 'image_url')
        }),
        ('Expiry', {
            'fields': ('expiration_date', 'quantity', 'status', 'location', 'notes')
        }),
        ('Ownership', {
            'fields': ('store', 'created_by_member', 'scanned_by_device_id')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
