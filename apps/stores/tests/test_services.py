"""
Service layer unit tests for stores app.

Tests cover:
- Store code format and collision handling
- Membership rules (join, leave, owner guard)
- Permission checks for owner-only operations
"""

import re
import pytest
from uuid import uuid4
from unittest.mock import patch

from apps.products.models import ProductEntry
from apps.stores.models import Store, StoreMember, StoreRole
from apps.stores.services import (
    create_store,
    get_store_by_id,
    delete_store,
    get_device_stores,
    get_store_entries,
    join_store,
    leave_store,
    get_store_members,
    get_current_store,
    generate_store_code,
    regenerate_store_code,
    render_store_code_qr,
)
from apps.stores.services.exceptions import (
    StoreNotFoundError,
    InvalidStoreCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
    StoreCodeGenerationError,
)

CODE_PATTERN = re.compile(r'^[A-HJKMNP-Z2-9]{3}-[A-HJKMNP-Z2-9]{4}$')


# =============================================================================
# Store Code Tests
# =============================================================================

class TestStoreCode:
    """Tests for invite_management.py code generation."""

    def test_code_format(self):
        for _ in range(50):
            assert CODE_PATTERN.match(generate_store_code())

    def test_code_avoids_ambiguous_characters(self):
        for _ in range(50):
            assert not set('O0I1L') & set(generate_store_code())

    def test_code_uses_configured_groups(self, settings):
        settings.STORE_CODE_GROUPS = [2, 2, 2]
        code = generate_store_code()
        assert [len(part) for part in code.split('-')] == [2, 2, 2]


# =============================================================================
# Store Management Tests
# =============================================================================

@pytest.mark.django_db
class TestStoreManagement:
    """Tests for store_management.py service functions."""

    def test_create_store_makes_creator_owner(self):
        store = create_store(name='Kiosk', nickname='Anna', device_id='dev-1')

        assert CODE_PATTERN.match(store.code)
        membership = store.get_membership('dev-1')
        assert membership.role == StoreRole.OWNER
        assert membership.nickname == 'Anna'

    def test_create_store_retries_on_collision(self, store):
        codes = iter([store.code, store.code, 'XYZ-7890'])

        with patch(
            'apps.stores.services.invite_management.generate_store_code',
            side_effect=lambda: next(codes)
        ):
            created = create_store(name='Kiosk', nickname='Anna', device_id='dev-1')

        assert created.code == 'XYZ-7890'

    def test_create_store_gives_up_after_max_attempts(self, store, settings):
        settings.STORE_CODE_MAX_ATTEMPTS = 10

        with patch(
            'apps.stores.services.invite_management.generate_store_code',
            return_value=store.code
        ) as mock_generate:
            with pytest.raises(StoreCodeGenerationError):
                create_store(name='Kiosk', nickname='Anna', device_id='dev-1')

        assert mock_generate.call_count == 10
        assert Store.objects.count() == 1

    def test_get_store_by_id_missing(self):
        with pytest.raises(StoreNotFoundError):
            get_store_by_id(store_id=uuid4())

    def test_delete_store_by_owner(self, store, owner_device, store_entry):
        delete_store(store_id=store.id, device_id=owner_device)

        assert not Store.objects.filter(id=store.id).exists()
        assert not StoreMember.objects.filter(store_id=store.id).exists()
        store_entry.refresh_from_db()
        assert store_entry.store is None
        assert ProductEntry.objects.filter(id=store_entry.id).exists()

    def test_delete_store_by_member_forbidden(self, store_with_member, member_device):
        with pytest.raises(InsufficientPermissionsError):
            delete_store(store_id=store_with_member.id, device_id=member_device)

        assert Store.objects.filter(id=store_with_member.id).exists()

    def test_delete_missing_store(self, owner_device):
        with pytest.raises(StoreNotFoundError):
            delete_store(store_id=uuid4(), device_id=owner_device)

    def test_get_device_stores(self, store_with_member, member_device):
        stores = get_device_stores(device_id=member_device)

        assert len(stores) == 1
        assert stores[0]['id'] == store_with_member.id
        assert stores[0]['role'] == StoreRole.MEMBER
        assert stores[0]['member_count'] == 2

    def test_get_store_entries(self, store, store_entry):
        assert [e.id for e in get_store_entries(store_id=store.id)] == [store_entry.id]

    def test_get_store_entries_missing_store(self):
        with pytest.raises(StoreNotFoundError):
            get_store_entries(store_id=uuid4())


# =============================================================================
# Membership Management Tests
# =============================================================================

@pytest.mark.django_db
class TestMembershipManagement:
    """Tests for membership_management.py service functions."""

    def test_join_store(self, store, member_device):
        joined_store, member = join_store(code=store.code, nickname='Ben', device_id=member_device)

        assert joined_store.id == store.id
        assert member.role == StoreRole.MEMBER
        assert store.members.count() == 2

    def test_join_is_case_insensitive(self, store, member_device):
        joined_store, _ = join_store(code=' abc-2345 ', nickname='Ben', device_id=member_device)
        assert joined_store.id == store.id

    def test_join_unknown_code(self, db, member_device):
        with pytest.raises(InvalidStoreCodeError):
            join_store(code='ZZZ-9999', nickname='Ben', device_id=member_device)

    def test_join_twice(self, store_with_member, member_device):
        with pytest.raises(AlreadyMemberError):
            join_store(code=store_with_member.code, nickname='Ben', device_id=member_device)

        assert store_with_member.members.count() == 2

    def test_member_can_leave(self, store_with_member, member_device):
        leave_store(store_id=store_with_member.id, device_id=member_device)
        assert not store_with_member.has_member(member_device)

    def test_owner_cannot_leave_with_members(self, store_with_member, owner_device):
        with pytest.raises(OwnerCannotLeaveError):
            leave_store(store_id=store_with_member.id, device_id=owner_device)

        assert store_with_member.is_owner(owner_device)

    def test_lone_owner_can_leave(self, store, owner_device):
        leave_store(store_id=store.id, device_id=owner_device)

        assert Store.objects.filter(id=store.id).exists()
        assert store.members.count() == 0

    def test_leave_as_non_member(self, store, other_device):
        with pytest.raises(NotMemberError):
            leave_store(store_id=store.id, device_id=other_device)

    def test_leave_missing_store(self, db, owner_device):
        with pytest.raises(StoreNotFoundError):
            leave_store(store_id=uuid4(), device_id=owner_device)

    def test_get_store_members_owner_first(self, store_with_member):
        members = list(get_store_members(store_id=store_with_member.id))

        assert members[0].role == StoreRole.OWNER
        assert members[1].nickname == 'Ben'

    def test_get_current_store(self, store_with_member, member_device):
        membership = get_current_store(device_id=member_device)
        assert membership.store_id == store_with_member.id

    def test_get_current_store_without_membership(self, db, other_device):
        with pytest.raises(NotMemberError):
            get_current_store(device_id=other_device)


# =============================================================================
# Store Code Management Tests
# =============================================================================

@pytest.mark.django_db
class TestStoreCodeManagement:
    """Tests for regenerating and sharing store codes."""

    def test_regenerate_code(self, store, owner_device):
        old_code = store.code
        new_code = regenerate_store_code(store_id=store.id, device_id=owner_device)

        store.refresh_from_db()
        assert store.code == new_code
        assert new_code != old_code

    def test_regenerate_code_member_forbidden(self, store_with_member, member_device):
        with pytest.raises(InsufficientPermissionsError):
            regenerate_store_code(store_id=store_with_member.id, device_id=member_device)

    def test_old_code_stops_working(self, store, owner_device, member_device):
        old_code = store.code
        regenerate_store_code(store_id=store.id, device_id=owner_device)

        with pytest.raises(InvalidStoreCodeError):
            join_store(code=old_code, nickname='Ben', device_id=member_device)

    def test_render_qr_is_png(self, store):
        png = render_store_code_qr(store=store)
        assert png.startswith(b'\x89PNG')
