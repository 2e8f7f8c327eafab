# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from securetag import create_app
from securetag.config import Environment, Settings
from securetag.models import Origin, Product, SecureTag, User, UserRole
from securetag.services import tag_service
from securetag.services.email_service import NotificationSink
from securetag.stores import InMemoryStore
from securetag.utils.password_utils import hash_password

TEST_PASSWORD = 'correct-horse-battery'
TEST_JWT_SECRET = 'test-jwt-secret-that-is-long-enough-for-hs256'


class RecordingNotifier(NotificationSink):
    """Keeps every notification instead of sending it"""

    def __init__(self):
        self.sent = []
        self.deliver = True

    def send(self, template_id, recipient, fields):
        self.sent.append((template_id, recipient, dict(fields)))
        return self.deliver

    def to(self, recipient):
        return [entry for entry in self.sent if entry[1] == recipient]


@pytest.fixture
def settings():
    return Settings(
        env=Environment.TESTING,
        jwt_secret=TEST_JWT_SECRET,
        store_backend='memory',
        bcrypt_rounds=4,
        email_mode='disabled',
        ratelimit_enabled=False,
        contact_inbox='inbox@securetag.test'
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(settings, store, notifier):
    """Create test app"""
    app = create_app(settings, store=store, notifier=notifier)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def services(app):
    return app.extensions['securetag']


@pytest.fixture
def make_user(store):
    def _make_user(email='maker@acme.test', role=UserRole.MANUFACTURER, company='Acme Corp',
                   verified=True, password=TEST_PASSWORD):
        user = User(
            first_name='Ada',
            last_name='Maker',
            email=email,
            password_hash=hash_password(password, rounds=4),
            company=company,
            role=role,
            is_verified=verified,
            created_at=datetime.now(timezone.utc)
        )
        return store.insert_user(user)
    return _make_user


@pytest.fixture
def manufacturer(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email='admin@securetag.test', role=UserRole.ADMIN, company='')


@pytest.fixture
def token_for(services):
    def _token_for(user):
        return services.tokens.generate_token(str(user._id), user.email, user.role.value)['token']
    return _token_for


@pytest.fixture
def auth_headers(manufacturer, token_for):
    """Authorization headers for the manufacturer"""
    return {'Authorization': f'Bearer {token_for(manufacturer)}'}


@pytest.fixture
def make_product(store):
    """Insert a tagged product directly, bypassing the API"""
    def _make_product(manufacturer_id=None, **overrides):
        identity = tag_service.generate()
        fields = dict(
            product_id=tag_service.generate_product_id(),
            name='Premium Headphones',
            category='electronics',
            batch_number='BATCH-001',
            manufacturer_id=manufacturer_id,
            manufacturing_date=datetime(2024, 1, 15, tzinfo=timezone.utc),
            expiry_date=datetime.now(timezone.utc) + timedelta(days=365),
            origin=Origin(country='Nigeria', city='Lagos'),
            secure_tag=SecureTag(
                qr_code='',
                nfc_id=identity.tag_id,
                tamper_seal=identity.tamper_seal,
                secret_key=identity.secret_key
            ),
            created_at=datetime.now(timezone.utc)
        )
        fields.update(overrides)
        return store.insert_product(Product(**fields))
    return _make_product


@pytest.fixture
def product(make_product, manufacturer):
    return make_product(manufacturer._id)


@pytest.fixture
def qr_for():
    def _qr_for(product):
        return tag_service.encode(product.product_id, product.secure_tag.secret_key)
    return _qr_for
