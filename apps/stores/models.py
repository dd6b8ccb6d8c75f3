# ==========================================
# apps/stores/models.py
# ==========================================

from django.db import models
import uuid


class StoreRole(models.TextChoices):
    OWNER = 'owner', 'Owner'
    MEMBER = 'member', 'Member'


class Store(models.Model):
    """Shared inventory (a.k.a. team) joined with a human-shareable code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    code = models.CharField(max_length=16, unique=True, db_index=True, editable=False)
    created_by_device_id = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stores'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.code})"

    def get_membership(self, device_id):
        return self.members.filter(device_id=device_id).first()

    def has_member(self, device_id):
        return self.members.filter(device_id=device_id).exists()

    def is_owner(self, device_id):
        return self.members.filter(device_id=device_id, role=StoreRole.OWNER).exists()


class StoreMember(models.Model):
    """Device membership in a store with a per-store nickname."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name='members')
    device_id = models.CharField(max_length=255, db_index=True)
    nickname = models.CharField(max_length=100)
    role = models.CharField(max_length=20, choices=StoreRole.choices, default=StoreRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'store_members'
        unique_together = [['store', 'device_id']]
        indexes = [
            models.Index(fields=['store', 'role'], name='store_members_role_idx'),
            models.Index(fields=['device_id', 'joined_at'], name='store_members_device_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.nickname} in {self.store.name} ({self.role})"
