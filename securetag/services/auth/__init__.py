"""
Authentication Services
"""
from .auth_service import AuthService
from .token_service import TokenService

__all__ = [
    'AuthService',
    'TokenService'
]
