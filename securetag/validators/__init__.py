"""
Validators module
Input validation for request payloads
"""

from .auth_validator import AuthValidator, normalize_email
from .contact_validator import ContactValidator
from .product_validator import ProductValidator
from .verification_validator import validate_verification_request

__all__ = [
    'AuthValidator',
    'ContactValidator',
    'ProductValidator',
    'normalize_email',
    'validate_verification_request'
]
