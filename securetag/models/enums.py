# models/enums.py
from enum import Enum


class ProductStatus(Enum):
    ACTIVE = "active"
    RECALLED = "recalled"
    EXPIRED = "expired"
    RETURNED = "returned"
    DESTROYED = "destroyed"


class VerificationMethod(Enum):
    QR = "qr"
    NFC = "nfc"


class VerificationResult(Enum):
    AUTHENTIC = "authentic"
    COUNTERFEIT = "counterfeit"
    TAMPERED = "tampered"
    EXPIRED = "expired"
    RECALLED = "recalled"


class UserRole(Enum):
    ADMIN = "admin"
    MANUFACTURER = "manufacturer"
    RETAILER = "retailer"
    CONSUMER = "consumer"


class SubscriptionPlan(Enum):
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class ContactStatus(Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
