# tests/unit/test_auth.py
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from securetag.core.exceptions import AuthError, ValidationError
from securetag.models import UserRole
from securetag.services.auth import AuthService, TokenService
from securetag.services.email_service import VERIFY_EMAIL
from securetag.utils.password_utils import hash_password, verify_password

SECRET = 'unit-test-secret-key-with-plenty-of-bytes'


def test_password_hashing():
    """Test password hashing and verification"""
    hashed = hash_password('test_password', rounds=4)

    assert hashed != 'test_password'
    assert verify_password(hashed, 'test_password') is True
    assert verify_password(hashed, 'wrong_password') is False


def test_verify_password_rejects_garbage_hash():
    assert verify_password('not-a-bcrypt-hash', 'anything') is False


def test_jwt_token_generation():
    """Test JWT token generation and verification"""
    tokens = TokenService(SECRET)

    issued = tokens.generate_token('user123', 'user@example.com', 'admin')
    payload = tokens.verify_token(issued['token'])

    assert payload['userId'] == 'user123'
    assert payload['email'] == 'user@example.com'
    assert payload['role'] == 'admin'
    assert payload['exp'] - payload['iat'] == 7 * 24 * 3600


def test_verify_token_accepts_bearer_prefix():
    tokens = TokenService(SECRET)
    token = tokens.generate_token('user123', 'user@example.com', 'consumer')['token']

    assert tokens.verify_token(f'Bearer {token}')['userId'] == 'user123'


def test_expired_token_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {'userId': 'u', 'email': 'e', 'role': 'consumer', 'iat': now - timedelta(days=8),
         'exp': now - timedelta(days=1)},
        SECRET,
        algorithm='HS256'
    )

    with pytest.raises(AuthError):
        TokenService(SECRET).verify_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = TokenService('another-secret-key-with-plenty-of-bytes').generate_token('u', 'e', 'admin')['token']

    with pytest.raises(AuthError):
        TokenService(SECRET).verify_token(token)


def test_token_without_identity_claims_is_rejected():
    token = jwt.encode({'email': 'e'}, SECRET, algorithm='HS256')

    with pytest.raises(AuthError):
        TokenService(SECRET).verify_token(token)


# ===============================
# AUTH SERVICE
# ===============================

@pytest.fixture
def auth_service(store, notifier):
    return AuthService(store, TokenService(SECRET), notifier, bcrypt_rounds=4)


def registration(email='new@user.test', role='manufacturer'):
    return {
        'first_name': 'Grace',
        'last_name': 'Hopper',
        'email': email,
        'password': 'password123',
        'company': 'Navy',
        'role': role
    }


def test_register_creates_unverified_user_and_sends_token(auth_service, store, notifier):
    result = auth_service.register_user(registration())

    user = store.find_user_by_email('new@user.test')
    assert result['userId'] == str(user._id)
    assert user.is_verified is False
    assert user.role == UserRole.MANUFACTURER
    assert user.password_hash != 'password123'

    (template, recipient, fields), = notifier.sent
    assert template == VERIFY_EMAIL
    assert recipient == 'new@user.test'
    assert fields['token'] == user.verification_token


def test_register_survives_email_failure(auth_service, store, notifier):
    notifier.deliver = False

    auth_service.register_user(registration())

    assert store.find_user_by_email('new@user.test') is not None


def test_register_duplicate_email(auth_service):
    auth_service.register_user(registration())

    with pytest.raises(ValidationError) as exc_info:
        auth_service.register_user(registration())

    assert exc_info.value.message == 'User already exists with this email'


def test_login_requires_verified_email(auth_service):
    auth_service.register_user(registration())

    with pytest.raises(AuthError) as exc_info:
        auth_service.authenticate('new@user.test', 'password123')

    assert exc_info.value.message == 'Please verify your email before logging in'


def test_verify_then_login(auth_service, store):
    auth_service.register_user(registration())
    token = store.find_user_by_email('new@user.test').verification_token

    auth_service.verify_email(token)
    result = auth_service.authenticate('new@user.test', 'password123')

    user = store.find_user_by_email('new@user.test')
    assert user.is_verified is True
    assert user.verification_token is None
    assert user.last_login is not None
    assert result['user']['email'] == 'new@user.test'
    assert TokenService(SECRET).verify_token(result['token'])['userId'] == str(user._id)


def test_login_wrong_password(auth_service, manufacturer):
    with pytest.raises(AuthError) as exc_info:
        auth_service.authenticate(manufacturer.email, 'not-the-password')

    assert exc_info.value.message == 'Invalid credentials'


def test_login_unknown_email(auth_service):
    with pytest.raises(AuthError):
        auth_service.authenticate('nobody@nowhere.test', 'password123')


def test_verify_email_unknown_token(auth_service):
    with pytest.raises(ValidationError):
        auth_service.verify_email('0' * 32)
