# ==========================================
# apps/daily_checks/models.py
# ==========================================

from django.db import models
import uuid


class SessionStatus(models.TextChoices):
    IN_PROGRESS = 'in_progress', 'In progress'
    COMPLETED = 'completed', 'Completed'


class CheckAction(models.TextChoices):
    CHECKED = 'checked', 'Checked'
    DISCOUNTED = 'discounted', 'Discounted'
    SOLD = 'sold', 'Sold'
    DISCARDED = 'discarded', 'Discarded'
    SKIPPED = 'skipped', 'Skipped'


class DailyCheckSession(models.Model):
    """
    Guided walk through a store's expiring and expired entries.

    The worklist is frozen into DailyCheckItem rows when the session
    starts, using ``warning_days`` and ``reference_date``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.CASCADE,
        related_name='daily_checks'
    )
    started_by = models.ForeignKey(
        'stores.StoreMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='started_daily_checks'
    )
    warning_days = models.PositiveSmallIntegerField(default=7)
    reference_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=SessionStatus.choices,
        default=SessionStatus.IN_PROGRESS
    )

    # Counters
    total_checked = models.PositiveIntegerField(default=0)
    total_discounted = models.PositiveIntegerField(default=0)
    total_sold = models.PositiveIntegerField(default=0)
    total_discarded = models.PositiveIntegerField(default=0)
    total_skipped = models.PositiveIntegerField(default=0)

    started_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'daily_check_sessions'
        indexes = [
            models.Index(fields=['store', '-started_at'], name='daily_checks_store_idx'),
        ]
        ordering = ['-started_at']

    def __str__(self):
        return f"Daily check {self.reference_date} for {self.store.name} ({self.status})"

    @property
    def is_in_progress(self):
        return self.status == SessionStatus.IN_PROGRESS


class DailyCheckItem(models.Model):
    """Entry on a session's worklist and the action taken on it."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(DailyCheckSession, on_delete=models.CASCADE, related_name='items')
    entry = models.ForeignKey(
        'products.ProductEntry',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='daily_check_items'
    )
    position = models.PositiveIntegerField()

    action = models.CharField(max_length=20, choices=CheckAction.choices, null=True, blank=True)
    performed_by = models.ForeignKey(
        'stores.StoreMember',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='daily_check_actions'
    )
    performed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'daily_check_items'
        unique_together = [['session', 'entry']]
        ordering = ['position']

    def __str__(self):
        return f"#{self.position} in {self.session_id}: {self.action or 'pending'}"
