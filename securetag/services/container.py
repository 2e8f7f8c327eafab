"""
Service wiring
Builds one set of services per application from explicit settings
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app

from securetag.config.settings import Settings
from securetag.services.analytics_service import AnalyticsService
from securetag.services.auth import AuthService, TokenService
from securetag.services.contact_service import ContactService
from securetag.services.email_service import EmailService, NotificationSink
from securetag.services.product_service import ProductService
from securetag.services.verification.ledger import VerificationLedger
from securetag.services.verification.verification_service import VerificationService
from securetag.stores.base import Store

EXTENSION_KEY = 'securetag'


@dataclass
class Services:
    settings: Settings
    store: Store
    notifier: NotificationSink
    tokens: TokenService
    auth: AuthService
    products: ProductService
    analytics: AnalyticsService
    verification: VerificationService
    contact: ContactService


def build_services(settings: Settings, store: Store,
                   notifier: Optional[NotificationSink] = None) -> Services:
    notifier = notifier or EmailService(settings)
    tokens = TokenService(settings.jwt_secret, settings.jwt_expiry_days, settings.jwt_algorithm)
    analytics = AnalyticsService(store)

    return Services(
        settings=settings,
        store=store,
        notifier=notifier,
        tokens=tokens,
        auth=AuthService(store, tokens, notifier, bcrypt_rounds=settings.bcrypt_rounds),
        products=ProductService(store),
        analytics=analytics,
        verification=VerificationService(store, VerificationLedger(store), analytics),
        contact=ContactService(store, notifier, settings.contact_inbox)
    )


def get_services() -> Services:
    """Services bound to the current application"""
    return current_app.extensions[EXTENSION_KEY]
