"""
Token Service
Issues and verifies HS256 access tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from securetag.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies HS256 access tokens"""

    def __init__(self, secret_key: str, expiry_days: int = 7, algorithm: str = 'HS256'):
        self.secret_key = secret_key
        self.expiry_days = expiry_days
        self.algorithm = algorithm

    def generate_token(self, user_id: str, email: str, role: str) -> Dict[str, Any]:
        """
        Generate JWT token for user

        Returns:
            Dict with the token and its expiry
        """
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(days=self.expiry_days)
        payload = {
            'userId': str(user_id),
            'email': email,
            'role': role,
            'iat': issued_at,
            'exp': expires_at
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.info(f"Token generated for user {user_id} with role {role}")

        return {
            'token': token,
            'expires_at': expires_at.isoformat()
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token

        Raises:
            AuthError: If the token is expired, malformed or incomplete
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise AuthError("Invalid token")

        if not payload.get('userId') or not payload.get('role'):
            raise AuthError("Invalid token payload")

        return payload
