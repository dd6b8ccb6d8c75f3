import pytest
from io import StringIO
from unittest.mock import patch
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status

from apps.notifications.models import PushToken, NotificationSchedule

POST_PATH = 'apps.notifications.services.push_client.requests.post'


@pytest.fixture(autouse=True)
def warning_window(settings):
    settings.EXPIRING_SOON_DAYS = 7


@pytest.mark.django_db
class TestRegisterToken:
    """Tests for POST /api/notifications/register-token/"""

    def test_register(self, api_client, device_id):
        url = reverse('notifications:register-token')
        data = {'device_id': device_id, 'expo_push_token': 'ExponentPushToken[x]', 'platform': 'android'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert PushToken.objects.get(device_id=device_id).platform == 'android'

    def test_register_again_updates(self, api_client, push_token, device_id):
        url = reverse('notifications:register-token')
        data = {'device_id': device_id, 'expo_push_token': 'ExponentPushToken[new]', 'platform': 'ios'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['expo_push_token'] == 'ExponentPushToken[new]'

    def test_invalid_platform(self, api_client, device_id):
        url = reverse('notifications:register-token')
        data = {'device_id': device_id, 'expo_push_token': 'x', 'platform': 'windows'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestSchedules:
    """Tests for schedule endpoints."""

    def test_create_weekly(self, api_client, device_id):
        url = reverse('notifications:schedule-create')
        data = {'device_id': device_id, 'schedule_type': 'weekly', 'day_of_week': 1, 'time_of_day': '07:30'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['day_of_week'] == 1
        assert response.data['enabled'] is True

    def test_create_bad_time(self, api_client, device_id):
        url = reverse('notifications:schedule-create')
        data = {'device_id': device_id, 'schedule_type': 'daily', 'time_of_day': '7:30'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'time_of_day' in response.data['error']

    def test_create_weekly_without_day(self, api_client, device_id):
        url = reverse('notifications:schedule-create')
        data = {'device_id': device_id, 'schedule_type': 'weekly', 'time_of_day': '07:30'}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list(self, api_client, daily_schedule, device_id):
        url = reverse('notifications:device-schedules', kwargs={'device_id': device_id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['id'] for s in response.data] == [str(daily_schedule.id)]

    def test_update(self, api_client, daily_schedule):
        url = reverse('notifications:schedule-detail', kwargs={'schedule_id': daily_schedule.id})
        response = api_client.put(url, {'enabled': False}, format='json')

        assert response.status_code == status.HTTP_200_OK
        daily_schedule.refresh_from_db()
        assert daily_schedule.enabled is False
        assert daily_schedule.time_of_day == '09:00'

    def test_update_missing(self, api_client, db):
        url = reverse('notifications:schedule-detail', kwargs={'schedule_id': '00000000-0000-0000-0000-000000000000'})
        response = api_client.put(url, {'enabled': False}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete(self, api_client, daily_schedule):
        url = reverse('notifications:schedule-detail', kwargs={'schedule_id': daily_schedule.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert not NotificationSchedule.objects.filter(id=daily_schedule.id).exists()


@pytest.mark.django_db
class TestSendReminders:
    """Tests for POST /api/notifications/send-expiration-reminders/"""

    def test_send(self, api_client, push_token, device_entries, device_id, expo_ok):
        url = reverse('notifications:send-reminders')

        with patch(POST_PATH, return_value=expo_ok):
            response = api_client.post(url, {'device_id': device_id}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True, 'notifications_sent': 2}

    def test_send_without_token(self, api_client, db, device_id):
        url = reverse('notifications:send-reminders')
        response = api_client.post(url, {'device_id': device_id}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSendScheduledRemindersCommand:
    """Tests for the send_scheduled_reminders management command."""

    def test_due_device_gets_reminders(self, push_token, daily_schedule, device_entries, device_id):
        out = StringIO()

        with patch(
            'apps.notifications.management.commands.send_scheduled_reminders.get_due_schedules',
            return_value=[daily_schedule]
        ), patch(
            'apps.notifications.management.commands.send_scheduled_reminders.send_expiration_reminders',
            return_value=2
        ) as mock_send:
            call_command('send_scheduled_reminders', stdout=out)

        mock_send.assert_called_once_with(device_id=device_id)
        assert 'Sent 2 reminder(s).' in out.getvalue()

    def test_nothing_due(self, db):
        out = StringIO()

        with patch(
            'apps.notifications.management.commands.send_scheduled_reminders.get_due_schedules',
            return_value=[]
        ):
            call_command('send_scheduled_reminders', stdout=out)

        assert 'No schedules due' in out.getvalue()
