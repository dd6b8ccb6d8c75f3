import pytest
from datetime import timedelta
from django.urls import reverse
from rest_framework import status

from apps.daily_checks.models import DailyCheckSession, SessionStatus
from apps.products.models import ProductEntry


@pytest.fixture
def session(stocked_store, member):
    from apps.daily_checks.services import start_session
    return start_session(store_id=stocked_store.id, member_id=member.id, warning_days=7)


@pytest.mark.django_db
class TestStartDailyCheck:
    """Tests for POST /api/daily-checks/sessions/"""

    def test_start(self, api_client, stocked_store, member):
        url = reverse('daily_checks:session-start')
        data = {'store_id': str(stocked_store.id), 'member_id': str(member.id), 'warning_days': 7}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == SessionStatus.IN_PROGRESS
        assert response.data['total_items'] == 3
        assert response.data['remaining_count'] == 3
        assert response.data['started_by_nickname'] == 'Anna'

    def test_warning_days_out_of_range(self, api_client, store, member):
        url = reverse('daily_checks:session-start')
        data = {'store_id': str(store.id), 'member_id': str(member.id), 'warning_days': 31}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'warning_days' in response.data['error']

    def test_unknown_store(self, api_client, member):
        url = reverse('daily_checks:session-start')
        data = {'store_id': '00000000-0000-0000-0000-000000000000', 'member_id': str(member.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_member_of_other_store(self, api_client, store, outsider):
        url = reverse('daily_checks:session-start')
        data = {'store_id': str(store.id), 'member_id': str(outsider.id)}
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestDailyCheckQueries:
    """Tests for reading daily checks."""

    def test_store_sessions(self, api_client, session, stocked_store):
        url = reverse('daily_checks:store-sessions', kwargs={'store_id': stocked_store.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['id'] for s in response.data] == [str(session.id)]

    def test_session_detail(self, api_client, session):
        url = reverse('daily_checks:session-detail', kwargs={'session_id': session.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['warning_days'] == 7

    def test_session_detail_missing(self, api_client, db):
        url = reverse('daily_checks:session-detail', kwargs={'session_id': '00000000-0000-0000-0000-000000000000'})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_worklist(self, api_client, session):
        url = reverse('daily_checks:session-products', kwargs={'session_id': session.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [e['product_name'] for e in response.data] == ['Expired yoghurt', 'Milk today', 'Cheese']
        assert response.data[0]['status'] == 'expired'


@pytest.mark.django_db
class TestDailyCheckActions:
    """Tests for POST /api/daily-checks/actions/"""

    def test_record_action(self, api_client, session, member):
        entry = ProductEntry.objects.get(product_name='Cheese')
        url = reverse('daily_checks:record-action')
        data = {
            'session_id': str(session.id),
            'entry_id': str(entry.id),
            'action': 'discounted',
            'member_id': str(member.id),
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['remaining_count'] == 2
        session.refresh_from_db()
        assert session.total_discounted == 1

    def test_record_action_twice(self, api_client, session, member):
        entry = ProductEntry.objects.get(product_name='Cheese')
        url = reverse('daily_checks:record-action')
        data = {
            'session_id': str(session.id),
            'entry_id': str(entry.id),
            'action': 'sold',
            'member_id': str(member.id),
        }
        api_client.post(url, data, format='json')
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        session.refresh_from_db()
        assert session.total_sold == 1

    def test_record_action_invalid_choice(self, api_client, session, member):
        entry = ProductEntry.objects.get(product_name='Cheese')
        url = reverse('daily_checks:record-action')
        data = {
            'session_id': str(session.id),
            'entry_id': str(entry.id),
            'action': 'eaten',
            'member_id': str(member.id),
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_record_action_entry_not_on_worklist(self, api_client, session, member):
        pasta = ProductEntry.objects.get(product_name='Pasta')
        url = reverse('daily_checks:record-action')
        data = {
            'session_id': str(session.id),
            'entry_id': str(pasta.id),
            'action': 'checked',
            'member_id': str(member.id),
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_record_action_outsider(self, api_client, session, outsider):
        entry = ProductEntry.objects.get(product_name='Cheese')
        url = reverse('daily_checks:record-action')
        data = {
            'session_id': str(session.id),
            'entry_id': str(entry.id),
            'action': 'checked',
            'member_id': str(outsider.id),
        }
        response = api_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestDailyCheckComplete:
    """Tests for PUT /api/daily-checks/sessions/{id}/complete/"""

    def test_complete(self, api_client, session):
        url = reverse('daily_checks:session-complete', kwargs={'session_id': session.id})
        response = api_client.put(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == SessionStatus.COMPLETED

    def test_complete_twice(self, api_client, session):
        url = reverse('daily_checks:session-complete', kwargs={'session_id': session.id})
        api_client.put(url)
        response = api_client.put(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestDailyCheckScenario:
    """An entry expiring in three days shows up only for wide enough windows."""

    def test_warning_window_decides_worklist(self, api_client, store, member, today):
        api_client.post(
            reverse('products:entry-list'),
            {
                'barcode': '321',
                'product_name': 'Cream',
                'expiration_date': (today + timedelta(days=3)).isoformat(),
                'store_id': str(store.id),
                'device_id': 'owner-device',
            },
            format='json'
        )

        wide = api_client.post(
            reverse('daily_checks:session-start'),
            {'store_id': str(store.id), 'member_id': str(member.id), 'warning_days': 7},
            format='json'
        )
        narrow = api_client.post(
            reverse('daily_checks:session-start'),
            {'store_id': str(store.id), 'member_id': str(member.id), 'warning_days': 2},
            format='json'
        )

        wide_list = api_client.get(reverse('daily_checks:session-products', kwargs={'session_id': wide.data['id']}))
        narrow_list = api_client.get(reverse('daily_checks:session-products', kwargs={'session_id': narrow.data['id']}))

        assert [e['product_name'] for e in wide_list.data] == ['Cream']
        assert narrow_list.data == []
        assert DailyCheckSession.objects.count() == 2
