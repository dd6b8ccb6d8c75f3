"""
Service layer unit tests for products app.

Tests cover:
- Expiration status classification boundaries
- Catalog upsert idempotency and merge behavior
- Product gallery and the primary image rule
- Entry lifecycle, ordering, filters and stats
"""

import pytest
from datetime import date, datetime, timedelta
from uuid import uuid4

from apps.products.models import Product, ProductEntry, ProductImage, EntryStatus
from apps.products.services import (
    classify,
    days_until_expiry,
    needs_attention,
    upsert_product,
    get_product_by_barcode,
    add_product_image,
    list_product_images,
    create_entry,
    update_entry,
    delete_entry,
    list_entries,
    get_entry_stats,
    refresh_entry_statuses,
)
from apps.products.services.exceptions import (
    ProductNotFoundError,
    EntryNotFoundError,
    InvalidEntryError,
)


@pytest.fixture(autouse=True)
def warning_window(settings):
    settings.EXPIRING_SOON_DAYS = 7


# =============================================================================
# Classifier Tests
# =============================================================================

class TestClassify:
    """Tests for expiry_status.classify."""

    REFERENCE = date(2025, 3, 10)

    def test_yesterday_is_expired(self):
        assert classify(date(2025, 3, 9), self.REFERENCE) == EntryStatus.EXPIRED

    def test_today_is_expiring_soon(self):
        """An item that expires today is still sellable."""
        assert classify(date(2025, 3, 10), self.REFERENCE) == EntryStatus.EXPIRING_SOON

    def test_end_of_window_is_expiring_soon(self):
        assert classify(date(2025, 3, 17), self.REFERENCE) == EntryStatus.EXPIRING_SOON

    def test_beyond_window_is_fresh(self):
        assert classify(date(2025, 3, 18), self.REFERENCE) == EntryStatus.FRESH

    def test_custom_warning_days(self):
        assert classify(date(2025, 3, 13), self.REFERENCE, warning_days=2) == EntryStatus.FRESH
        assert classify(date(2025, 3, 12), self.REFERENCE, warning_days=2) == EntryStatus.EXPIRING_SOON

    def test_time_of_day_is_ignored(self):
        late = datetime(2025, 3, 10, 23, 59)
        assert classify(late, self.REFERENCE) == EntryStatus.EXPIRING_SOON
        assert days_until_expiry(late, datetime(2025, 3, 10, 0, 1)) == 0

    def test_uses_configured_window(self, settings):
        settings.EXPIRING_SOON_DAYS = 3
        assert classify(date(2025, 3, 14), self.REFERENCE) == EntryStatus.FRESH

    def test_needs_attention(self):
        assert needs_attention(date(2025, 3, 1), self.REFERENCE)
        assert not needs_attention(date(2025, 4, 1), self.REFERENCE)

    def test_rejects_non_dates(self):
        with pytest.raises(TypeError):
            classify('2025-03-10', self.REFERENCE)


# =============================================================================
# Catalog Tests
# =============================================================================

@pytest.mark.django_db
class TestCatalog:
    """Tests for catalog.py service functions."""

    def test_upsert_creates_product(self):
        product = upsert_product(barcode='123', name='Bread', category='Bakery')

        assert product.barcode == '123'
        assert product.name == 'Bread'
        assert Product.objects.count() == 1

    def test_upsert_is_idempotent(self):
        upsert_product(barcode='123', name='Bread')
        upsert_product(barcode='123', name='Bread')

        assert Product.objects.filter(barcode='123').count() == 1

    def test_upsert_keeps_values_when_absent(self):
        """Absent fields never erase stored ones."""
        upsert_product(barcode='123', name='Bread', category='Bakery', image_url='http://img/1.jpg')
        product = upsert_product(barcode='123', name='Rye Bread', category=None, image_url='')

        assert product.name == 'Rye Bread'
        assert product.category == 'Bakery'
        assert product.image_url == 'http://img/1.jpg'

    def test_upsert_refreshes_updated_at(self):
        first = upsert_product(barcode='123', name='Bread')
        second = upsert_product(barcode='123', category='Bakery')

        assert second.updated_at >= first.updated_at
        assert second.name == 'Bread'

    def test_get_product_by_barcode(self, product):
        assert get_product_by_barcode(barcode=product.barcode).id == product.id

    def test_get_unknown_barcode(self):
        with pytest.raises(ProductNotFoundError):
            get_product_by_barcode(barcode='does-not-exist')

    def test_upsert_image_only_fills_missing_primary(self):
        upsert_product(barcode='123', name='Bread', image_url='http://img/first.jpg')
        product = upsert_product(barcode='123', image_url='http://img/second.jpg')

        assert product.image_url == 'http://img/first.jpg'

    def test_entry_image_does_not_replace_primary(self, product, today):
        product.image_url = 'http://img/primary.jpg'
        product.save()

        create_entry(
            barcode=product.barcode,
            product_name=product.name,
            expiration_date=today + timedelta(days=3),
            image_url='http://img/from-entry.jpg',
        )

        product.refresh_from_db()
        assert product.image_url == 'http://img/primary.jpg'


# =============================================================================
# Product Gallery Tests
# =============================================================================

@pytest.mark.django_db
class TestProductGallery:
    """Tests for add_product_image and list_product_images"""

    def test_first_image_becomes_primary(self, product):
        first = add_product_image(barcode=product.barcode, image_url='http://img/first.jpg')
        second = add_product_image(barcode=product.barcode, image_url='http://img/second.jpg')

        product.refresh_from_db()
        assert first.is_primary is True
        assert second.is_primary is False
        assert product.image_url == 'http://img/first.jpg'

    def test_existing_primary_is_kept(self, product):
        product.image_url = 'http://img/scanned.jpg'
        product.save()

        image = add_product_image(barcode=product.barcode, image_url='http://img/upload.jpg')

        product.refresh_from_db()
        assert image.is_primary is False
        assert product.image_url == 'http://img/scanned.jpg'

    def test_image_records_uploader(self, product, store, owner_member):
        image = add_product_image(
            barcode=product.barcode,
            image_url='http://img/first.jpg',
            store=store,
            member=owner_member,
        )

        assert image.uploaded_by_store == store
        assert image.uploaded_by_member == owner_member

    def test_unknown_barcode_is_not_created(self):
        with pytest.raises(ProductNotFoundError):
            add_product_image(barcode='does-not-exist', image_url='http://img/x.jpg')

        assert not Product.objects.filter(barcode='does-not-exist').exists()

    def test_list_primary_first(self, product):
        product.image_url = 'http://img/scanned.jpg'
        product.save()
        add_product_image(barcode=product.barcode, image_url='http://img/a.jpg')
        ProductImage.objects.filter(product=product).update(is_primary=True)
        add_product_image(barcode=product.barcode, image_url='http://img/b.jpg')

        images = list(list_product_images(barcode=product.barcode))

        assert [image.image_url for image in images] == ['http://img/a.jpg', 'http://img/b.jpg']
        assert images[0].is_primary is True

    def test_list_unknown_barcode(self):
        with pytest.raises(ProductNotFoundError):
            list_product_images(barcode='does-not-exist')


# =============================================================================
# Entry Management Tests
# =============================================================================

@pytest.mark.django_db
class TestEntryManagement:
    """Tests for entry_management.py service functions."""

    def test_create_entry_upserts_product_and_classifies(self, today):
        entry = create_entry(
            barcode='555',
            product_name='Yoghurt',
            expiration_date=today + timedelta(days=3),
            quantity=2,
            scanned_by_device_id='device-alpha',
        )

        assert entry.status == EntryStatus.EXPIRING_SOON
        assert entry.product.barcode == '555'
        assert entry.product.name == 'Yoghurt'
        assert entry.quantity == 2

    def test_create_entry_expiring_today(self, today):
        entry = create_entry(barcode='555', product_name='Yoghurt', expiration_date=today)
        assert entry.status == EntryStatus.EXPIRING_SOON

    def test_create_entry_rejects_zero_quantity(self, today):
        with pytest.raises(InvalidEntryError):
            create_entry(barcode='555', product_name='Yoghurt', expiration_date=today, quantity=0)

        assert not Product.objects.filter(barcode='555').exists()

    def test_create_entry_keeps_store_and_member(self, store, owner_member, today):
        entry = create_entry(
            barcode='555',
            product_name='Yoghurt',
            expiration_date=today + timedelta(days=20),
            store=store,
            created_by_member=owner_member,
        )

        assert entry.store == store
        assert entry.created_by_member == owner_member
        assert entry.status == EntryStatus.FRESH

    def test_update_entry_recomputes_status(self, make_entry, today):
        entry = make_entry(days=30)

        updated = update_entry(entry_id=entry.id, expiration_date=today - timedelta(days=1))

        assert updated.status == EntryStatus.EXPIRED
        entry.refresh_from_db()
        assert entry.status == EntryStatus.EXPIRED

    def test_update_entry_merges_fields(self, make_entry):
        entry = make_entry(days=30, location='Shelf A')

        update_entry(entry_id=entry.id, notes='Top shelf')

        entry.refresh_from_db()
        assert entry.notes == 'Top shelf'
        assert entry.location == 'Shelf A'

    def test_update_entry_rejects_unknown_fields(self, make_entry):
        entry = make_entry()
        with pytest.raises(InvalidEntryError):
            update_entry(entry_id=entry.id, barcode='999')

    def test_update_missing_entry(self):
        with pytest.raises(EntryNotFoundError):
            update_entry(entry_id=uuid4(), notes='x')

    def test_delete_entry(self, make_entry):
        entry = make_entry()
        delete_entry(entry_id=entry.id)
        assert not ProductEntry.objects.filter(id=entry.id).exists()

    def test_delete_missing_entry(self):
        with pytest.raises(EntryNotFoundError):
            delete_entry(entry_id=uuid4())

    def test_list_entries_ordered_by_expiration(self, make_entry):
        late = make_entry(days=20)
        early = make_entry(days=-2)
        middle = make_entry(days=5)

        entries = list_entries()

        assert [e.id for e in entries] == [early.id, middle.id, late.id]

    def test_list_entries_filters(self, make_entry, store):
        in_store = make_entry(days=3, store=store)
        make_entry(days=3, device_id='device-beta')

        assert [e.id for e in list_entries(store_id=store.id)] == [in_store.id]
        assert len(list_entries(device_id='device-beta')) == 1

    def test_status_filter_uses_live_classification(self, make_entry):
        """A stale cached status does not hide an entry from the filter."""
        stale = make_entry(days=-1, status=EntryStatus.FRESH)
        make_entry(days=30)

        expired = list_entries(status=EntryStatus.EXPIRED)

        assert [e.id for e in expired] == [stale.id]

    def test_stats_counts_live_statuses(self, make_entry):
        make_entry(days=-3)
        make_entry(days=0)
        make_entry(days=7)
        make_entry(days=8, status=EntryStatus.EXPIRED)

        stats = get_entry_stats()

        assert stats == {'total': 4, 'fresh': 1, 'expiring_soon': 2, 'expired': 1}

    def test_stats_empty(self):
        assert get_entry_stats() == {'total': 0, 'fresh': 0, 'expiring_soon': 0, 'expired': 0}

    def test_refresh_entry_statuses(self, make_entry):
        stale = make_entry(days=-1, status=EntryStatus.FRESH)
        make_entry(days=30, status=EntryStatus.FRESH)

        changed = refresh_entry_statuses()

        assert changed == 1
        stale.refresh_from_db()
        assert stale.status == EntryStatus.EXPIRED


@pytest.mark.django_db
class TestRefreshEntryStatusesCommand:
    """Tests for the refresh_entry_statuses management command."""

    def test_command_reports_changes(self, make_entry):
        from io import StringIO
        from django.core.management import call_command

        make_entry(days=-1, status=EntryStatus.FRESH)
        out = StringIO()

        call_command('refresh_entry_statuses', stdout=out)

        assert 'Updated status of 1 entry.' in out.getvalue()

    def test_command_rejects_bad_date(self, db):
        from django.core.management import call_command
        from django.core.management.base import CommandError

        with pytest.raises(CommandError):
            call_command('refresh_entry_statuses', '--date', 'yesterday')
