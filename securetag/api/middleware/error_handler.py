"""
Error Handler Middleware
Centralized error handling for the application
"""

import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import CounterfeitError, SecureTagError, ValidationError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def init_app(app):
        """Initialize error handlers for Flask app"""

        # Scans that do not match a genuine product
        @app.errorhandler(CounterfeitError)
        def handle_counterfeit(error):
            return jsonify({
                'result': 'counterfeit',
                'message': error.message
            }), error.status_code

        # Domain errors
        @app.errorhandler(SecureTagError)
        def handle_domain_error(error):
            details = error.errors if isinstance(error, ValidationError) and len(error.errors) > 1 else None
            if error.status_code >= 500:
                logger.error(f"{type(error).__name__}: {error.message} - {request.path}")
            return response_middleware.create_error_response(
                error.error, error.status_code, message=error.message, details=details
            )

        # 404 Not Found
        @app.errorhandler(404)
        def not_found(error):
            logger.info(f"404 Not Found: {request.method} {request.path}")
            return jsonify({
                'success': False,
                'message': 'Endpoint not found'
            }), 404

        # 429 Too Many Requests
        @app.errorhandler(429)
        def too_many_requests(error):
            logger.warning(f"429 Too Many Requests: {request.remote_addr} {request.path}")
            return response_middleware.create_error_response(
                'Too many requests',
                429,
                message='Too many requests from this IP, please try again later.'
            )

        # Remaining HTTP exceptions (405, 413, 415 ...)
        @app.errorhandler(HTTPException)
        def handle_http_exception(error):
            return response_middleware.create_error_response(error.name, error.code, message=error.description)

        # Generic exception handler
        @app.errorhandler(Exception)
        def handle_unexpected_error(error):
            logger.exception(f"Unexpected error on {request.method} {request.path}: {error}")

            # Don't expose internal errors outside development
            message = str(error) if app.config.get('DEBUG') else 'Something went wrong'
            return response_middleware.create_error_response('Internal server error', 500, message=message)


error_handler = ErrorHandler()
