# ==========================================
# apps/products/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class EntryStatus(models.TextChoices):
    FRESH = 'fresh', 'Fresh'
    EXPIRING_SOON = 'expiring_soon', 'Expiring soon'
    EXPIRED = 'expired', 'Expired'


class Product(models.Model):
    """Shared catalog record keyed by barcode."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    barcode = models.CharField(max_length=128, unique=True, db_index=True)
    name = models.CharField(max_length=255, blank=True)
    category = models.CharField(max_length=100, blank=True, null=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['name']

    def __str__(self):
        return f"{self.name or 'Unnamed product'} ({self.barcode})"


class ProductImage(models.Model):
    """
    Photo in a product's shared gallery.

    ``is_primary`` marks the image that became the product's primary
    image; a product has at most one.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='images')
    image_url = models.CharField(max_length=500)
    uploaded_by_store = models.ForeignKey(
        'stores.Store',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='product_images'
    )
    uploaded_by_member = models.ForeignKey(
        'stores.StoreMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='product_images'
    )
    is_primary = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'product_images'
        ordering = ['-is_primary', 'created_at']

    def __str__(self):
        marker = ' (primary)' if self.is_primary else ''
        return f"Image of {self.product.barcode}{marker}"


class ProductEntry(models.Model):
    """
    One tracked instance of a product with its own expiration date.

    ``status`` is a cache of the classification at the last write; read
    paths that depend on "today" classify again.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='entries')

    # Denormalized at write time
    barcode = models.CharField(max_length=128, db_index=True)
    product_name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True, null=True)

    expiration_date = models.DateField()
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    location = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)

    status = models.CharField(
        max_length=20,
        choices=EntryStatus.choices,
        default=EntryStatus.FRESH
    )

    # Ownership
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='entries'
    )
    created_by_member = models.ForeignKey(
        'stores.StoreMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='entries'
    )
    scanned_by_device_id = models.CharField(max_length=255, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_entries'
        indexes = [
            models.Index(fields=['store', 'expiration_date'], name='entries_store_expiry_idx'),
            models.Index(fields=['scanned_by_device_id', 'expiration_date'], name='entries_device_expiry_idx'),
            models.Index(fields=['expiration_date'], name='entries_expiry_idx'),
        ]
        ordering = ['expiration_date', 'created_at']

    def __str__(self):
        return f"{self.product_name} x{self.quantity} - {self.expiration_date} ({self.status})"
