"""
HTTP tests for the /line and /admin routers

The container's kv_store and reservation_notifier providers are overridden with
in-memory doubles (see test/conftest.py), so no Kvrocks or LINE endpoint is needed.
"""

from fastapi.testclient import TestClient
import pytest

from test.service.line_booking.fake_kv_store import FakeKvStore
from test.service.line_booking.fake_notifier import FakeNotifier


pytestmark = pytest.mark.unit


class TestSlotsApi:
    def test_fallback_slots_with_label(self, client: TestClient):
        response = client.get('/line/slots', params={'date': '2025-11-17'})

        assert response.status_code == 200
        slots = response.json()['slots']
        assert [s['id'] for s in slots] == ['S-2025-11-17-1', 'S-2025-11-17-2', 'S-2025-11-17-3']
        assert [s['label'] for s in slots] == ['10:00〜11:00', '12:00〜13:00', '15:00〜16:00']
        assert slots[0]['start'] == '2025-11-17T01:00:00.000Z'

    def test_bad_date(self, client: TestClient):
        response = client.get('/line/slots', params={'date': '17-11-2025'})

        assert response.status_code == 400
        assert response.json() == {'detail': 'bad date'}

    def test_published_slots_are_served(self, client: TestClient):
        # Given
        response = client.put(
            '/admin/slots/2025-11-17',
            json={
                'slots': [
                    {
                        'id': 'cut-1',
                        'start': '2025-11-17T00:30:00.000Z',
                        'end': '2025-11-17T01:30:00.000Z',
                        'capacity': 2,
                        'staff': 'Yui',
                    }
                ]
            },
        )
        assert response.status_code == 200
        assert response.json()['slots'][0]['remaining'] == 2

        # When
        slots = client.get('/line/slots', params={'date': '2025-11-17'}).json()['slots']

        # Then
        assert slots == [
            {
                'id': 'cut-1',
                'start': '2025-11-17T00:30:00.000Z',
                'end': '2025-11-17T01:30:00.000Z',
                'capacity': 2,
                'remaining': 2,
                'label': '09:30〜10:30',
                'staff': 'Yui',
            }
        ]

    def test_publish_rejects_bad_capacity(self, client: TestClient, fake_kv_store: FakeKvStore):
        response = client.put(
            '/admin/slots/2025-11-17',
            json={'slots': [{'id': 'x', 'start': 's', 'end': 'e', 'capacity': 0}]},
        )

        assert response.status_code == 400
        assert fake_kv_store.data == {}


class TestReserveApi:
    def test_reserve_then_lookup(self, client: TestClient, fake_kv_store: FakeKvStore):
        # When
        response = client.post(
            '/line/reserve', json={'slotId': 'S-2025-11-17-2', 'name': 'Taro', 'menuId': 'cut'}
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        assert body['ok'] is True
        reservation = body['reservation']
        assert reservation['id'] == body['id']
        assert reservation['date'] == '2025-11-17'
        assert reservation['start'] == '2025-11-17T03:00:00.000Z'
        assert reservation['menuId'] == 'cut'
        assert reservation['status'] == 'reserved'

        # And: the record can be looked up by id
        lookup = client.get(f'/line/reservations/{body["id"]}')
        assert lookup.status_code == 200
        assert lookup.json() == reservation

    def test_missing_slot_id_body(self, client: TestClient, fake_kv_store: FakeKvStore):
        response = client.post('/line/reserve', json={'name': 'Taro'})

        assert response.status_code == 400
        assert fake_kv_store.data == {}

    def test_blank_slot_id(self, client: TestClient, fake_kv_store: FakeKvStore):
        response = client.post('/line/reserve', json={'slotId': '   '})

        assert response.status_code == 400
        assert response.json() == {'detail': 'slotId is required'}
        assert fake_kv_store.data == {}

    def test_unknown_reservation(self, client: TestClient):
        response = client.get('/line/reservations/does-not-exist')

        assert response.status_code == 404


class TestNotifyApi:
    def _reserve(self, client: TestClient) -> str:
        response = client.post('/line/reserve', json={'slotId': 'S-2025-11-17-1', 'name': 'Taro'})
        return response.json()['id']

    def test_notify(self, client: TestClient, fake_notifier: FakeNotifier):
        reserve_id = self._reserve(client)

        response = client.post('/line/notify', json={'reserveId': reserve_id})

        assert response.status_code == 200
        assert response.json() == {'ok': True}
        assert len(fake_notifier.messages) == 1
        assert reserve_id in fake_notifier.messages[0]

    def test_missing_reserve_id(self, client: TestClient):
        assert client.post('/line/notify', json={}).status_code == 400

    def test_unknown_reserve_id(self, client: TestClient):
        assert client.post('/line/notify', json={'reserveId': 'nope'}).status_code == 404

    def test_notifier_failure_is_soft(
        self, client: TestClient, fake_notifier: FakeNotifier, fake_kv_store: FakeKvStore
    ):
        reserve_id = self._reserve(client)
        fake_notifier.fail_with = 'LINE Notify answered 500'
        before = dict(fake_kv_store.data)

        response = client.post('/line/notify', json={'reserveId': reserve_id})

        assert response.status_code == 502
        assert response.json() == {'ok': False}
        assert fake_kv_store.data == before


class TestAdminApi:
    def _seed(self, kv_store: FakeKvStore) -> None:
        kv_store.seed(
            'resv:a', {'id': 'a', 'slotId': 'S-1', 'date': '2025-11-17', 'createdAt': 'c'}
        )
        kv_store.seed('resv:b', {'data': {'slotId': 'S-2', 'date': '2025-11-19', 'createdAt': 'c'}})
        kv_store.seed('misc:c', {'hello': 'world'})

    def test_list_reservations(self, client: TestClient, fake_kv_store: FakeKvStore):
        self._seed(fake_kv_store)

        response = client.get('/admin/reservations')

        assert response.status_code == 200
        assert response.json() == {
            'reservations': [
                {
                    'id': 'a',
                    'slotId': 'S-1',
                    'date': '2025-11-17',
                    'start': '',
                    'end': '',
                    'name': '',
                    'createdAt': 'c',
                },
                {
                    'id': 'resv:b',
                    'slotId': 'S-2',
                    'date': '2025-11-19',
                    'start': '',
                    'end': '',
                    'name': '',
                    'createdAt': 'c',
                },
            ],
            'count': 2,
            'prefix': None,
        }

    def test_list_reservations_with_range(self, client: TestClient, fake_kv_store: FakeKvStore):
        self._seed(fake_kv_store)

        response = client.get(
            '/admin/reservations', params={'from': '2025-11-18', 'to': '2025-11-30'}
        )

        assert response.json()['count'] == 1
        assert response.json()['reservations'][0]['id'] == 'resv:b'

    def test_list_reservations_exact_date(self, client: TestClient, fake_kv_store: FakeKvStore):
        self._seed(fake_kv_store)

        response = client.get('/admin/reservations', params={'date': '2025-11-17'})

        assert [r['id'] for r in response.json()['reservations']] == ['a']

    def test_kv_dump(self, client: TestClient, fake_kv_store: FakeKvStore):
        self._seed(fake_kv_store)

        response = client.get('/admin/kv-dump', params={'prefix': 'misc:'})

        assert response.json() == {
            'count': 1,
            'prefix': 'misc:',
            'items': [{'key': 'misc:c', 'value': {'hello': 'world'}}],
        }


class TestCommonEndpoints:
    def test_health(self, client: TestClient):
        assert client.get('/health').json()['status'] == 'healthy'

    def test_metrics(self, client: TestClient):
        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'booking_slot_resolutions_total' in response.text
