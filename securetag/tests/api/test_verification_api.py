# tests/api/test_verification_api.py
from datetime import datetime, timedelta, timezone

from securetag.core.exceptions import StoreUnavailableError
from securetag.models import ProductStatus, SecureTag, UserRole


def test_qr_authentic(client, product, qr_for, store):
    response = client.post('/api/verify/qr', json={
        'qrData': qr_for(product),
        'location': {'country': 'Nigeria', 'city': 'Abuja'},
        'deviceInfo': {'platform': 'android'}
    }, headers={'User-Agent': 'ScannerApp/1.0', 'X-Forwarded-For': '203.0.113.9, 10.0.0.1'})

    assert response.status_code == 200
    body = response.get_json()
    assert body['result'] == 'authentic'
    assert body['confidence'] == 100
    assert body['message'] == 'Product verified as authentic'
    assert body['product'] == {
        'id': product.product_id,
        'name': 'Premium Headphones',
        'manufacturer': 'Acme Corp',
        'manufacturingDate': '2024-01-15T00:00:00+00:00',
        'origin': {'country': 'Nigeria', 'state': '', 'city': 'Lagos',
                   'coordinates': {'lat': None, 'lng': None}},
        'verificationCount': 1
    }

    (record,) = store.verifications
    assert record['method'] == 'qr'
    assert record['result'] == 'authentic'
    assert record['location']['country'] == 'Nigeria'
    assert record['location']['ip_address'] == '203.0.113.9'
    assert record['device_info']['user_agent'] == 'ScannerApp/1.0'
    assert record['device_info']['platform'] == 'android'
    assert record['verifier'] is None


def test_nfc_authentic(client, product):
    response = client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id})

    assert response.status_code == 200
    body = response.get_json()
    assert body['result'] == 'authentic'
    assert body['message'] == 'Product verified as authentic via NFC'


def test_qr_scan_with_surrounding_whitespace(client, product, qr_for):
    response = client.post('/api/verify/qr', json={'qrData': f'  {qr_for(product)}\n'})

    assert response.status_code == 200
    assert response.get_json()['result'] == 'authentic'


def test_each_verification_increments_count(client, product, qr_for, store):
    for expected in (1, 2, 3):
        body = client.post('/api/verify/qr', json={'qrData': qr_for(product)}).get_json()
        assert body['product']['verificationCount'] == expected

    assert store.get_product(product.product_id).verification_count == 3
    assert len(store.verifications) == 3


def test_recalled_product(client, make_product, manufacturer):
    recalled = make_product(manufacturer._id, status=ProductStatus.RECALLED)

    body = client.post('/api/verify/nfc', json={'nfcId': recalled.secure_tag.nfc_id}).get_json()

    assert body['result'] == 'recalled'
    assert body['confidence'] == 95


def test_expired_product(client, make_product, manufacturer, qr_for):
    expired = make_product(manufacturer._id, expiry_date=datetime.now(timezone.utc) - timedelta(days=1))

    body = client.post('/api/verify/qr', json={'qrData': qr_for(expired)}).get_json()

    assert body['result'] == 'expired'
    assert body['confidence'] == 90


def test_tampered_product(client, make_product, manufacturer):
    tampered = make_product(manufacturer._id, secure_tag=SecureTag(nfc_id='b' * 32, secret_key='c' * 32,
                                                                   is_active=False))

    body = client.post('/api/verify/nfc', json={'nfcId': 'b' * 32}).get_json()

    assert body['result'] == 'tampered'
    assert body['confidence'] == 85
    assert body['product']['id'] == tampered.product_id


def test_malformed_qr_is_counterfeit(client, store):
    response = client.post('/api/verify/qr', json={'qrData': 'hello-world'})

    assert response.status_code == 400
    assert response.get_json() == {'result': 'counterfeit', 'message': 'Invalid QR code format'}
    assert store.verifications == []


def test_unknown_product_is_counterfeit(client):
    response = client.post('/api/verify/qr', json={'qrData': 'ST-ST100-ABCDEF'})

    assert response.status_code == 404
    assert response.get_json() == {'result': 'counterfeit', 'message': 'Product not found'}


def test_wrong_key_is_counterfeit(client, product, store):
    response = client.post('/api/verify/qr', json={'qrData': f'ST-{product.product_id}-{"0" * 32}'})

    assert response.status_code == 400
    assert response.get_json() == {'result': 'counterfeit', 'message': 'Invalid authentication key'}
    assert store.get_product(product.product_id).verification_count == 0
    assert store.analytics == {}


def test_unknown_nfc_is_counterfeit(client):
    response = client.post('/api/verify/nfc', json={'nfcId': 'e' * 32})

    assert response.status_code == 404
    assert response.get_json() == {'result': 'counterfeit', 'message': 'Invalid NFC tag'}


def test_missing_credential(client):
    assert client.post('/api/verify/qr', json={}).status_code == 400
    assert client.post('/api/verify/nfc', json={'nfcId': '   '}).status_code == 400
    assert client.post('/api/verify/qr', json={'qrData': 'x', 'location': 'Lagos'}).status_code == 400


def test_token_attributes_verifier(client, product, make_user, token_for, store):
    consumer = make_user(email='shopper@example.com', role=UserRole.CONSUMER)

    client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id},
                headers={'Authorization': f'Bearer {token_for(consumer)}'})

    assert store.verifications[0]['verifier'] == consumer._id


def test_invalid_token_is_ignored_on_verify(client, product):
    response = client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id},
                           headers={'Authorization': 'Bearer garbage'})

    assert response.status_code == 200
    assert response.get_json()['result'] == 'authentic'


def test_verification_bumps_manufacturer_bucket(client, product, qr_for, store):
    client.post('/api/verify/qr', json={'qrData': qr_for(product)})
    client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id})

    (bucket,) = store.analytics.values()
    assert bucket['manufacturer_id'] == product.manufacturer_id
    assert bucket['metrics']['total_verifications'] == 2
    assert bucket['metrics']['methods'] == {'qr': 1, 'nfc': 1}
    assert bucket['metrics']['results']['authentic'] == 2


def test_ledger_failure_fails_the_request(client, product, qr_for, store, monkeypatch):
    def unavailable(record):
        raise StoreUnavailableError("Database unavailable")

    monkeypatch.setattr(store, 'record_verification', unavailable)

    response = client.post('/api/verify/qr', json={'qrData': qr_for(product)})

    assert response.status_code == 503
    assert response.get_json()['error'] == 'Service unavailable'
    assert store.analytics == {}


def test_analytics_failure_does_not_fail_the_request(client, product, qr_for, store, monkeypatch):
    def broken(day, manufacturer_id, increments):
        raise RuntimeError("analytics down")

    monkeypatch.setattr(store, 'increment_analytics', broken)

    response = client.post('/api/verify/qr', json={'qrData': qr_for(product)})

    assert response.status_code == 200
    assert response.get_json()['result'] == 'authentic'
    assert store.get_product(product.product_id).verification_count == 1
