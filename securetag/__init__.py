# securetag/__init__.py
import logging
import os
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS

from securetag.config.settings import Settings
from securetag.extensions import limiter
from securetag.services.container import EXTENSION_KEY, build_services
from securetag.services.email_service import NotificationSink
from securetag.stores import Store, build_store

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None,
               notifier: Optional[NotificationSink] = None) -> Flask:
    """
    Application factory pattern

    Args:
        settings: Configuration; read from the environment when omitted
        store: Persistence backend; built from settings when omitted
        notifier: Notification sink; the email service when omitted
    """
    settings = settings or Settings.from_env()
    setup_logging(settings)

    app = Flask(__name__)
    app.config.update(settings.flask_config())
    app.logger.info(f"Configuration loaded ({settings.env.value})")

    CORS(app,
         origins=settings.cors_origins,
         allow_headers=['Content-Type', 'Authorization'],
         methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
         supports_credentials=True)

    limiter.init_app(app)

    if store is None:
        store = build_store(settings)
    store.ensure_indexes()

    app.extensions[EXTENSION_KEY] = build_services(settings, store, notifier)

    from securetag.api.middleware import security_headers
    from securetag.api.middleware.error_handler import error_handler
    from securetag.api.route_registry import register_routes

    security_headers.init_app(app)
    register_routes(app)
    error_handler.init_app(app)

    return app


def setup_logging(settings: Settings):
    """Setup application logging"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    # Quiet down noisy loggers
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
