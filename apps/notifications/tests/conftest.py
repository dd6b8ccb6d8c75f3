import pytest
from datetime import timedelta
from unittest.mock import MagicMock
from django.utils import timezone
from rest_framework.test import APIClient

from apps.notifications.models import PushToken, NotificationSchedule, ScheduleType
from apps.products.models import Product, ProductEntry


@pytest.fixture
def api_client():
    """Return an API client (devices are not authenticated)."""
    return APIClient()


@pytest.fixture
def device_id():
    return 'phone-1'


@pytest.fixture
def push_token(db, device_id):
    """Registered Expo token for ``device_id``."""
    return PushToken.objects.create(
        device_id=device_id,
        expo_push_token='ExponentPushToken[abc123]',
        platform='ios',
    )


@pytest.fixture
def daily_schedule(db, device_id):
    return NotificationSchedule.objects.create(
        device_id=device_id,
        schedule_type=ScheduleType.DAILY,
        time_of_day='09:00',
    )


@pytest.fixture
def device_entries(db, device_id):
    """Entries of the device: two expiring soon, one expired, one fresh."""
    product = Product.objects.create(barcode='8000', name='Ham')
    today = timezone.localdate()
    entries = []
    for name, days in [('Ham', 1), ('Salad', 5), ('Old bread', -1), ('Beans', 90)]:
        entries.append(ProductEntry.objects.create(
            product=product,
            barcode=product.barcode,
            product_name=name,
            expiration_date=today + timedelta(days=days),
            scanned_by_device_id=device_id,
        ))
    return entries


@pytest.fixture
def expo_ok():
    """Successful Expo response with an ok ticket."""
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = {'data': {'status': 'ok', 'id': 'ticket-1'}}
    return response
