# core/exceptions.py
from typing import List, Optional


class SecureTagError(Exception):
    """Base error carrying the HTTP status it maps to"""
    status_code = 500
    error = 'Internal server error'

    def __init__(self, message: str = '', status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message or self.error
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(SecureTagError):
    error = 'Configuration error'


class ValidationError(SecureTagError):
    status_code = 400
    error = 'Validation failed'

    def __init__(self, message: str = '', errors: Optional[List[str]] = None):
        super().__init__(message or (errors[0] if errors else ''))
        self.errors = errors or [self.message]


class AuthError(SecureTagError):
    status_code = 401
    error = 'Authentication failed'


class PermissionDenied(SecureTagError):
    status_code = 403
    error = 'Forbidden'


class NotFoundError(SecureTagError):
    status_code = 404
    error = 'Not found'


class ConflictError(SecureTagError):
    status_code = 400
    error = 'Conflict'


class CounterfeitError(SecureTagError):
    """A scan or tap that cannot be matched to a genuine product"""
    status_code = 400
    error = 'counterfeit'


class MalformedCodeError(CounterfeitError):
    status_code = 400


class StoreUnavailableError(SecureTagError):
    status_code = 503
    error = 'Service unavailable'
