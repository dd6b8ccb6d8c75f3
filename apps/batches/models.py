# ==========================================
# apps/batches/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class BatchStatus(models.TextChoices):
    IN_PROGRESS = 'in_progress', 'In progress'
    COMPLETED = 'completed', 'Completed'


class BatchScan(models.Model):
    """
    Multi-item scan session owned by a device.

    Items are staged here and turned into product entries when the
    session is completed. ``item_count`` always equals the number of items.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_id = models.CharField(max_length=255, db_index=True)
    name = models.CharField(max_length=200, blank=True)
    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.IN_PROGRESS
    )
    item_count = models.PositiveIntegerField(default=0)

    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='batch_scans'
    )
    created_by_member = models.ForeignKey(
        'stores.StoreMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='batch_scans'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'batch_scans'
        indexes = [
            models.Index(fields=['device_id', '-created_at'], name='batch_scans_device_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name or 'Batch'} ({self.item_count} items, {self.status})"

    @property
    def is_in_progress(self):
        return self.status == BatchStatus.IN_PROGRESS


class BatchScanItem(models.Model):
    """Product staged in a batch scan; carries no status of its own."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    batch = models.ForeignKey(BatchScan, on_delete=models.CASCADE, related_name='items')
    position = models.PositiveIntegerField()

    barcode = models.CharField(max_length=128)
    product_name = models.CharField(max_length=255)
    expiration_date = models.DateField()
    category = models.CharField(max_length=100, blank=True, null=True)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    location = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'batch_scan_items'
        unique_together = [['batch', 'position']]
        ordering = ['position']

    def __str__(self):
        return f"#{self.position} {self.product_name} - {self.expiration_date}"
