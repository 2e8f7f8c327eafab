"""
Data models
Typed records mapped to and from stored documents
"""

from .enums import (
    ProductStatus,
    VerificationMethod,
    VerificationResult,
    UserRole,
    SubscriptionPlan,
    ContactStatus
)
from .product import Product, SecureTag, Origin, Coordinates
from .verification import VerificationRecord, Location, DeviceInfo
from .analytics import AnalyticsBucket
from .user import User
from .contact import ContactMessage

__all__ = [
    'ProductStatus',
    'VerificationMethod',
    'VerificationResult',
    'UserRole',
    'SubscriptionPlan',
    'ContactStatus',
    'Product',
    'SecureTag',
    'Origin',
    'Coordinates',
    'VerificationRecord',
    'Location',
    'DeviceInfo',
    'AnalyticsBucket',
    'User',
    'ContactMessage'
]
