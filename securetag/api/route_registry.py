"""
API Route Registry
Central registration of all API routes
"""
import logging

from flask import Flask

logger = logging.getLogger(__name__)


def register_routes(app: Flask):
    """Register all API routes with the Flask app"""

    # ===============================
    # AUTH ROUTES
    # ===============================
    from securetag.api.v1.auth_routes import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    logger.info("Registered: /api/auth")

    # ===============================
    # MANUFACTURER ROUTES
    # ===============================
    from securetag.api.v1.analytics_routes import analytics_bp
    from securetag.api.v1.product_routes import product_bp

    app.register_blueprint(product_bp, url_prefix='/api/products')
    app.register_blueprint(analytics_bp, url_prefix='/api/analytics')
    logger.info("Registered: /api/products, /api/analytics")

    # ===============================
    # PUBLIC ROUTES
    # ===============================
    from securetag.api.v1.contact_routes import contact_bp
    from securetag.api.v1.verification_routes import verification_bp

    app.register_blueprint(verification_bp, url_prefix='/api/verify')
    app.register_blueprint(contact_bp, url_prefix='/api/contact')
    logger.info("Registered: /api/verify, /api/contact")

    # ===============================
    # HEALTH & STATUS ROUTES
    # ===============================
    from securetag.api.v1.health_routes import health_bp
    app.register_blueprint(health_bp)
    logger.info("Registered: /, /api/health")

    route_count = len([rule for rule in app.url_map.iter_rules() if rule.endpoint != 'static'])
    logger.info(f"Total routes registered: {route_count}")
