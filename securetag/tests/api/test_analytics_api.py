# tests/api/test_analytics_api.py
from bson import ObjectId


def test_dashboard_requires_token(client):
    assert client.get('/api/analytics/dashboard').status_code == 401


def test_dashboard_after_verifications(client, auth_headers, product, qr_for):
    client.post('/api/verify/qr', json={'qrData': qr_for(product), 'location': {'country': 'Ghana'}})
    client.post('/api/verify/qr', json={'qrData': 'ST-ST100-ABCDEF'})
    client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id})

    response = client.get('/api/analytics/dashboard?period=7d', headers=auth_headers)

    assert response.status_code == 200
    report = response.get_json()
    assert report['period'] == '7d'
    assert report['summary']['totalVerifications'] == 2
    assert report['summary']['authenticityRate'] == 100.0
    assert report['methods'] == {'qr': 1, 'nfc': 1}
    assert report['geographic'] == [{'country': 'Ghana', 'count': 1}]


def test_daily_buckets_for_caller(client, auth_headers, product, qr_for):
    client.post('/api/verify/qr', json={'qrData': qr_for(product)})
    client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id})

    response = client.get('/api/analytics/daily', headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['days'] == 30
    (bucket,) = body['buckets']
    assert bucket['manufacturer'] == str(product.manufacturer_id)
    assert bucket['totalVerifications'] == 2
    assert bucket['methods'] == {'qr': 1, 'nfc': 1}
    assert bucket['results']['authentic'] == 2


def test_daily_other_manufacturer_requires_admin(client, auth_headers):
    response = client.get(f'/api/analytics/daily?manufacturerId={ObjectId()}', headers=auth_headers)
    assert response.status_code == 403


def test_daily_admin_can_inspect_manufacturer(client, admin, token_for, product):
    client.post('/api/verify/nfc', json={'nfcId': product.secure_tag.nfc_id})

    response = client.get(
        f'/api/analytics/daily?manufacturerId={product.manufacturer_id}&days=7',
        headers={'Authorization': f'Bearer {token_for(admin)}'}
    )

    assert response.status_code == 200
    assert response.get_json()['buckets'][0]['totalVerifications'] == 1


def test_daily_rejects_bad_window(client, auth_headers):
    assert client.get('/api/analytics/daily?days=0', headers=auth_headers).status_code == 400
    assert client.get('/api/analytics/daily?days=abc', headers=auth_headers).status_code == 400
