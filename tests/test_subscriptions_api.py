from __future__ import annotations


def test_create_returns_201(client, auth_headers, sample_payload):
    response = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers())
    assert response.status_code == 201
    body = response.json()
    assert body['id'] == 1
    assert body['userId'] == 'user-1'
    assert body['name'] == 'Netflix'
    assert body['category'] == 'Entertainment'
    assert body['frequency'] == 'Monthly'
    assert body['nextPayment'] == '2026-11-01'
    assert body['notificationsEnabled'] is True
    assert body['isPaused'] is False
    assert float(body['price']) == 15.0


def test_price_accepts_number(client, auth_headers, sample_payload):
    sample_payload['price'] = 9.99
    response = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers())
    assert response.status_code == 201
    assert float(response.json()['price']) == 9.99


def test_list_only_returns_own(client, auth_headers, sample_payload):
    client.post('/api/subscriptions', json=sample_payload, headers=auth_headers())
    client.post('/api/subscriptions', json={**sample_payload, 'name': 'Hulu'}, headers=auth_headers('user-2'))

    mine = client.get('/api/subscriptions', headers=auth_headers()).json()
    assert [s['name'] for s in mine] == ['Netflix']


def test_list_includes_paused_and_filters_category(client, auth_headers, sample_payload):
    client.post('/api/subscriptions', json={**sample_payload, 'isPaused': True}, headers=auth_headers())
    client.post(
        '/api/subscriptions',
        json={**sample_payload, 'name': 'JetBrains', 'category': 'Software'},
        headers=auth_headers(),
    )

    everything = client.get('/api/subscriptions', headers=auth_headers()).json()
    assert len(everything) == 2
    assert everything[0]['isPaused'] is True

    software = client.get('/api/subscriptions?category=Software', headers=auth_headers()).json()
    assert [s['name'] for s in software] == ['JetBrains']


def test_get_one_and_missing(client, auth_headers, sample_payload):
    created = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers()).json()
    assert client.get(f"/api/subscriptions/{created['id']}", headers=auth_headers()).status_code == 200
    assert client.get('/api/subscriptions/999', headers=auth_headers()).status_code == 404
    assert client.get(f"/api/subscriptions/{created['id']}", headers=auth_headers('user-2')).status_code == 404


def test_update(client, auth_headers, sample_payload):
    created = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers()).json()
    response = client.patch(
        f"/api/subscriptions/{created['id']}",
        json={**sample_payload, 'price': '19.99', 'frequency': 'Quarterly'},
        headers=auth_headers(),
    )
    assert response.status_code == 200
    assert float(response.json()['price']) == 19.99
    assert response.json()['frequency'] == 'Quarterly'


def test_update_missing_is_404_and_store_unchanged(client, storage, auth_headers, sample_payload):
    client.post('/api/subscriptions', json=sample_payload, headers=auth_headers())
    response = client.patch('/api/subscriptions/999', json={**sample_payload, 'name': 'Ghost'}, headers=auth_headers())
    assert response.status_code == 404
    assert response.json() == {'detail': 'Subscription not found'}
    assert [s.name for s in storage.subscriptions.values()] == ['Netflix']


def test_delete(client, auth_headers, sample_payload):
    created = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers()).json()
    response = client.delete(f"/api/subscriptions/{created['id']}", headers=auth_headers())
    assert response.status_code == 204
    assert response.content == b''
    assert client.delete(f"/api/subscriptions/{created['id']}", headers=auth_headers()).status_code == 404


def test_toggle_pause_twice(client, auth_headers, sample_payload):
    created = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers()).json()
    url = f"/api/subscriptions/{created['id']}/pause"

    paused = client.patch(url, headers=auth_headers()).json()
    assert paused['isPaused'] is True
    assert {k: v for k, v in paused.items() if k != 'isPaused'} == {
        k: v for k, v in created.items() if k != 'isPaused'
    }

    resumed = client.patch(url, headers=auth_headers()).json()
    assert resumed == created


def test_toggle_missing(client, auth_headers):
    assert client.patch('/api/subscriptions/5/pause', headers=auth_headers()).status_code == 404


def test_validation_errors(client, auth_headers, sample_payload):
    bad = {
        **sample_payload,
        'frequency': 'Daily',
        'category': 'Travel',
        'price': '-1',
        'nextPayment': 'tomorrow',
        'name': '',
    }
    response = client.post('/api/subscriptions', json=bad, headers=auth_headers())
    assert response.status_code == 422
    body = response.json()
    assert body['detail'] == 'Validation failed'
    codes = {e['field']: e['code'] for e in body['errors']}
    assert codes == {
        'frequency': 'invalid_choice',
        'category': 'invalid_choice',
        'price': 'invalid_amount',
        'nextPayment': 'invalid_date',
        'name': 'too_short',
    }


def test_missing_field(client, auth_headers, sample_payload):
    del sample_payload['nextPayment']
    response = client.post('/api/subscriptions', json=sample_payload, headers=auth_headers())
    assert response.status_code == 422
    assert response.json()['errors'] == [
        {'field': 'nextPayment', 'code': 'missing', 'message': 'Field required'}
    ]


def test_price_keeps_sub_cent_precision(client, auth_headers, sample_payload):
    response = client.post('/api/subscriptions', json={**sample_payload, 'price': '0.125'}, headers=auth_headers())
    assert response.status_code == 201
    assert response.json()['price'] == '0.125'
