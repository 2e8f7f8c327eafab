# config/settings.py
"""
Application Settings
Environment-based configuration, loaded once at process start and passed
explicitly to every component that needs it
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from securetag.core.exceptions import ConfigurationError

DEV_JWT_SECRET = 'securetag-secret-key'


class Environment(Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    """Typed configuration for the SecureTag backend"""
    env: Environment = Environment.DEVELOPMENT
    secret_key: str = 'dev-secret-key-change-in-production'

    # Auth
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = 'HS256'
    jwt_expiry_days: int = 7
    bcrypt_rounds: int = 4

    # Persistence
    store_backend: str = 'mongo'
    mongodb_uri: str = 'mongodb://localhost:27017/securetag'
    database_name: str = 'securetag'
    mongodb_transactions: bool = False
    mongodb_timeout_ms: int = 5000

    # HTTP
    frontend_url: str = 'http://localhost:3000'
    cors_origins: List[str] = field(default_factory=lambda: ['http://localhost:3000'])
    max_content_length: int = 10 * 1024 * 1024
    port: int = 3001

    # Email
    email_mode: str = 'console'
    smtp_host: str = 'smtp.gmail.com'
    smtp_port: int = 587
    email_user: str = ''
    email_pass: str = ''
    from_email: str = 'securetag6@gmail.com'
    contact_inbox: str = 'securetag6@gmail.com'

    # Rate limiting
    ratelimit_enabled: bool = True
    ratelimit_storage_uri: str = 'memory://'
    api_rate_limit: str = '100 per 15 minutes'
    contact_rate_limit: str = '5 per 15 minutes'

    # Logging
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    version: str = '1.0.0'

    @property
    def is_production(self) -> bool:
        return self.env == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.env == Environment.TESTING

    @property
    def debug(self) -> bool:
        return self.env == Environment.DEVELOPMENT

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, dotenv: bool = True) -> 'Settings':
        """
        Build settings from environment variables

        Args:
            environ: Mapping to read from (defaults to os.environ)
            dotenv: Load a .env file into os.environ first

        Raises:
            ConfigurationError: If a value is invalid for the environment
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = dict(os.environ)

        try:
            env = Environment(environ.get('FLASK_ENV', 'development'))
        except ValueError:
            raise ConfigurationError(f"Unknown FLASK_ENV: {environ.get('FLASK_ENV')}")

        frontend_url = environ.get('FRONTEND_URL', 'http://localhost:3000')
        cors_origins = [
            origin.strip()
            for origin in environ.get('CORS_ORIGINS', frontend_url).split(',')
            if origin.strip()
        ]

        try:
            settings = cls(
                env=env,
                secret_key=environ.get('SECRET_KEY', cls.secret_key),
                jwt_secret=environ.get('JWT_SECRET', DEV_JWT_SECRET),
                jwt_expiry_days=int(environ.get('JWT_EXPIRY_DAYS', '7')),
                bcrypt_rounds=int(environ.get(
                    'BCRYPT_ROUNDS', '12' if env == Environment.PRODUCTION else '4'
                )),
                store_backend=environ.get('STORE_BACKEND', 'mongo').lower(),
                mongodb_uri=environ.get('MONGODB_URI', cls.mongodb_uri),
                database_name=environ.get('DATABASE_NAME', 'securetag'),
                mongodb_transactions=_env_bool(environ.get('MONGODB_TRANSACTIONS')),
                mongodb_timeout_ms=int(environ.get('MONGODB_TIMEOUT_MS', '5000')),
                frontend_url=frontend_url,
                cors_origins=cors_origins,
                max_content_length=int(environ.get('MAX_CONTENT_LENGTH', str(10 * 1024 * 1024))),
                port=int(environ.get('PORT', '3001')),
                email_mode=environ.get('EMAIL_MODE', 'console').lower(),
                smtp_host=environ.get('SMTP_HOST', 'smtp.gmail.com'),
                smtp_port=int(environ.get('SMTP_PORT', '587')),
                email_user=environ.get('EMAIL_USER', ''),
                email_pass=environ.get('EMAIL_PASS', ''),
                from_email=environ.get('FROM_EMAIL') or environ.get('EMAIL_USER') or cls.from_email,
                contact_inbox=environ.get('CONTACT_INBOX', cls.contact_inbox),
                ratelimit_enabled=_env_bool(
                    environ.get('RATELIMIT_ENABLED'), default=env != Environment.TESTING
                ),
                ratelimit_storage_uri=environ.get('RATELIMIT_STORAGE_URI', 'memory://'),
                api_rate_limit=environ.get('API_RATE_LIMIT', cls.api_rate_limit),
                contact_rate_limit=environ.get('CONTACT_RATE_LIMIT', cls.contact_rate_limit),
                log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
                log_file=environ.get('LOG_FILE') or None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}")

        settings.validate()
        return settings

    def validate(self):
        """Reject settings that are unsafe or unusable"""
        if self.store_backend not in ('mongo', 'memory'):
            raise ConfigurationError(f"Unknown STORE_BACKEND: {self.store_backend}")

        if self.email_mode not in ('console', 'smtp', 'disabled'):
            raise ConfigurationError(f"Unknown EMAIL_MODE: {self.email_mode}")

        if self.is_production:
            if self.jwt_secret == DEV_JWT_SECRET:
                raise ConfigurationError("JWT_SECRET must be set in production")
            if self.store_backend == 'memory':
                raise ConfigurationError("The in-memory store cannot be used in production")

    def flask_config(self) -> Dict[str, Any]:
        """Values copied into app.config"""
        return {
            'SECRET_KEY': self.secret_key,
            'DEBUG': self.debug,
            'TESTING': self.is_testing,
            'MAX_CONTENT_LENGTH': self.max_content_length,
            'RATELIMIT_ENABLED': self.ratelimit_enabled,
            'RATELIMIT_STORAGE_URI': self.ratelimit_storage_uri,
            'RATELIMIT_DEFAULT': self.api_rate_limit,
            'RATELIMIT_HEADERS_ENABLED': True,
            'CONTACT_RATE_LIMIT': self.contact_rate_limit,
        }
