# tests/unit/test_settings.py
import pytest

from securetag.config import Environment, Settings
from securetag.config.settings import DEV_JWT_SECRET
from securetag.core.exceptions import ConfigurationError


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.env == Environment.DEVELOPMENT
    assert settings.debug is True
    assert settings.jwt_secret == DEV_JWT_SECRET
    assert settings.jwt_expiry_days == 7
    assert settings.store_backend == 'mongo'
    assert settings.port == 3001
    assert settings.api_rate_limit == '100 per 15 minutes'
    assert settings.contact_rate_limit == '5 per 15 minutes'
    assert settings.max_content_length == 10 * 1024 * 1024
    assert settings.ratelimit_enabled is True


def test_testing_environment_disables_rate_limits():
    settings = Settings.from_env({'FLASK_ENV': 'testing'})

    assert settings.is_testing is True
    assert settings.ratelimit_enabled is False


def test_values_are_parsed():
    settings = Settings.from_env({
        'FLASK_ENV': 'production',
        'JWT_SECRET': 'a-real-production-secret',
        'CORS_ORIGINS': 'https://a.example, https://b.example',
        'MONGODB_TRANSACTIONS': 'true',
        'PORT': '8080',
        'EMAIL_MODE': 'SMTP',
        'LOG_LEVEL': 'debug'
    })

    assert settings.is_production is True
    assert settings.bcrypt_rounds == 12
    assert settings.cors_origins == ['https://a.example', 'https://b.example']
    assert settings.mongodb_transactions is True
    assert settings.port == 8080
    assert settings.email_mode == 'smtp'
    assert settings.log_level == 'DEBUG'


def test_production_requires_jwt_secret():
    with pytest.raises(ConfigurationError):
        Settings.from_env({'FLASK_ENV': 'production'})


def test_production_rejects_memory_store():
    with pytest.raises(ConfigurationError):
        Settings.from_env({'FLASK_ENV': 'production', 'JWT_SECRET': 'x' * 40, 'STORE_BACKEND': 'memory'})


@pytest.mark.parametrize('environ', [
    {'FLASK_ENV': 'staging'},
    {'PORT': 'eighty'},
    {'STORE_BACKEND': 'redis'},
    {'EMAIL_MODE': 'pigeon'},
])
def test_invalid_values_raise(environ):
    with pytest.raises(ConfigurationError):
        Settings.from_env(environ)


def test_flask_config_carries_rate_limits():
    config = Settings(contact_rate_limit='3 per hour').flask_config()

    assert config['RATELIMIT_DEFAULT'] == '100 per 15 minutes'
    assert config['CONTACT_RATE_LIMIT'] == '3 per hour'
    assert config['MAX_CONTENT_LENGTH'] == 10 * 1024 * 1024
