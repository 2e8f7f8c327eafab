# tests/api/test_auth_api.py
from securetag.services.email_service import VERIFY_EMAIL


def register(client, **overrides):
    payload = {
        'firstName': 'Grace',
        'lastName': 'Hopper',
        'email': 'Grace@Example.com',
        'password': 'password123',
        'company': 'Acme',
        'role': 'manufacturer'
    }
    payload.update(overrides)
    return client.post('/api/auth/register', json=payload)


def test_register_verify_login_flow(client, notifier, store):
    response = register(client)
    assert response.status_code == 201
    body = response.get_json()
    assert body['message'].startswith('User created successfully')
    assert body['userId']

    (template, recipient, fields), = notifier.sent
    assert template == VERIFY_EMAIL
    assert recipient == 'grace@example.com'

    response = client.post('/api/auth/login', json={'email': 'grace@example.com', 'password': 'password123'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Please verify your email before logging in'

    response = client.post('/api/auth/verify-email', json={'token': fields['token']})
    assert response.status_code == 200
    assert response.get_json()['message'] == 'Email verified successfully'

    response = client.post('/api/auth/login', json={'email': 'GRACE@example.com', 'password': 'password123'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['token']
    assert body['user']['email'] == 'grace@example.com'
    assert body['user']['role'] == 'manufacturer'
    assert 'password_hash' not in body['user']


def test_register_defaults_to_consumer(client, store):
    register(client, role=None)
    assert store.find_user_by_email('grace@example.com').role.value == 'consumer'


def test_register_validation_errors(client):
    response = client.post('/api/auth/register', json={'email': 'bad', 'password': 'short'})

    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Validation failed'
    assert 'First name is required' in body['details']
    assert 'Please provide a valid email address' in body['details']
    assert 'Password must be at least 8 characters long' in body['details']


def test_register_rejects_unknown_role(client):
    response = register(client, role='superuser')
    assert response.status_code == 400


def test_register_duplicate_email(client):
    assert register(client).status_code == 201

    response = register(client, email='grace@example.com')

    assert response.status_code == 400
    assert response.get_json()['message'] == 'User already exists with this email'


def test_login_invalid_credentials(client, manufacturer):
    response = client.post('/api/auth/login', json={'email': manufacturer.email, 'password': 'nope-nope'})

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid credentials'


def test_login_missing_fields(client):
    response = client.post('/api/auth/login', json={'email': 'someone@example.com'})
    assert response.status_code == 400


def test_verify_email_unknown_token(client):
    response = client.post('/api/auth/verify-email', json={'token': 'does-not-exist'})

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid or expired verification token'


def test_register_cannot_self_assign_admin(client, notifier, store):
    response = register(client, role='admin')

    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Validation failed'
    assert body['message'] == 'Role must be one of: manufacturer, retailer, consumer'
    assert store.find_user_by_email('grace@example.com') is None
    assert notifier.sent == []


def test_register_retailer_role_is_kept(client, store):
    response = register(client, role='retailer')

    assert response.status_code == 201
    assert store.find_user_by_email('grace@example.com').role.value == 'retailer'
