"""
Health & Status Routes
"""

import logging

from flask import Blueprint

from securetag.api.middleware.response_middleware import response_middleware
from securetag.services.container import get_services
from securetag.utils.date_helpers import utc_now

health_bp = Blueprint('health', __name__)
logger = logging.getLogger(__name__)


@health_bp.route('/', methods=['GET'])
def home():
    services = get_services()
    return response_middleware.create_success_response({
        'message': 'SecureTag Product Verification API',
        'status': 'running',
        'version': services.settings.version,
        'endpoints': {
            'health': '/api/health',
            'auth': '/api/auth',
            'products': '/api/products',
            'verify': '/api/verify',
            'analytics': '/api/analytics',
            'contact': '/api/contact'
        }
    })


@health_bp.route('/api/health', methods=['GET'])
def health_check():
    """Service status with a database check; 503 when the store is unreachable"""
    services = get_services()
    health_data = {
        'status': 'healthy',
        'timestamp': utc_now().isoformat(),
        'version': services.settings.version,
        'environment': services.settings.env.value,
        'checks': {}
    }

    if services.store.ping():
        health_data['checks']['database'] = {'status': 'healthy'}
    else:
        logger.error("Health check: database ping failed")
        health_data['checks']['database'] = {'status': 'unhealthy'}
        health_data['status'] = 'unhealthy'

    status_code = 200 if health_data['status'] == 'healthy' else 503
    return response_middleware.create_success_response(health_data, status_code)
