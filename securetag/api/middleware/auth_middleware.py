"""
Authentication Middleware
Token extraction and validation only; business logic stays in services
"""

import logging
from functools import wraps
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from flask import g, request

from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import AuthError
from securetag.models import UserRole
from securetag.services.container import get_services

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Middleware for authentication - token handling only"""

    @staticmethod
    def extract_token() -> Optional[str]:
        """Bearer token from the Authorization header, or None"""
        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return None

        scheme, _, token = auth_header.partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            return None
        return token.strip()

    @staticmethod
    def _identity(token: str):
        """Decode a token into (user_id, role); raises AuthError"""
        payload = get_services().tokens.verify_token(token)
        try:
            return ObjectId(payload['userId']), UserRole(payload['role'])
        except (InvalidId, TypeError, ValueError):
            raise AuthError("Token carries an invalid identity")

    @staticmethod
    def token_required(f):
        """
        Decorator for routes requiring authentication
        Sets g.current_user_id and g.current_user_role
        """
        @wraps(f)
        def wrapper(*args, **kwargs):
            token = AuthMiddleware.extract_token()
            if not token:
                return response_middleware.create_error_response('Access token required', 401)

            try:
                g.current_user_id, g.current_user_role = AuthMiddleware._identity(token)
            except AuthError as e:
                logger.warning(f"Rejected token on {request.path}: {e.message}")
                return response_middleware.create_error_response('Invalid or expired token', 403)

            return f(*args, **kwargs)

        return wrapper

    @staticmethod
    def optional_auth(f):
        """
        Decorator for routes that work with or without authentication
        Sets g.current_user_id to None when no valid token is presented
        """
        @wraps(f)
        def wrapper(*args, **kwargs):
            g.current_user_id = None
            g.current_user_role = None

            token = AuthMiddleware.extract_token()
            if token:
                try:
                    g.current_user_id, g.current_user_role = AuthMiddleware._identity(token)
                except AuthError as e:
                    logger.info(f"Ignoring invalid token on {request.path}: {e.message}")

            return f(*args, **kwargs)

        return wrapper


auth_middleware = AuthMiddleware()
