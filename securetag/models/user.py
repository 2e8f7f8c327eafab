# models/user.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.models.enums import SubscriptionPlan, UserRole


@dataclass
class User:
    """Registered account: consumer, retailer, manufacturer or admin"""
    _id: Optional[ObjectId] = None

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password_hash: str = ""
    company: str = ""
    role: UserRole = UserRole.CONSUMER

    # Email verification and password reset
    is_verified: bool = False
    verification_token: Optional[str] = None
    reset_password_token: Optional[str] = None
    reset_password_expires: Optional[datetime] = None

    subscription_plan: SubscriptionPlan = SubscriptionPlan.FREE

    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Company name, or the person's full name"""
        return self.company or f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database storage"""
        return {
            "_id": self._id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "password_hash": self.password_hash,
            "company": self.company,
            "role": self.role.value,
            "is_verified": self.is_verified,
            "verification_token": self.verification_token,
            "reset_password_token": self.reset_password_token,
            "reset_password_expires": self.reset_password_expires,
            "subscription_plan": self.subscription_plan.value,
            "created_at": self.created_at,
            "last_login": self.last_login
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> 'User':
        return cls(
            _id=doc.get("_id"),
            first_name=doc.get("first_name", ""),
            last_name=doc.get("last_name", ""),
            email=doc.get("email", ""),
            password_hash=doc.get("password_hash", ""),
            company=doc.get("company") or "",
            role=UserRole(doc.get("role", UserRole.CONSUMER.value)),
            is_verified=doc.get("is_verified", False),
            verification_token=doc.get("verification_token"),
            reset_password_token=doc.get("reset_password_token"),
            reset_password_expires=doc.get("reset_password_expires"),
            subscription_plan=SubscriptionPlan(doc.get("subscription_plan", SubscriptionPlan.FREE.value)),
            created_at=doc.get("created_at"),
            last_login=doc.get("last_login")
        )

    def to_profile(self) -> Dict[str, Any]:
        """Public profile returned on login"""
        return {
            "id": str(self._id) if self._id else None,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "company": self.company,
            "role": self.role.value,
            "subscriptionPlan": self.subscription_plan.value
        }
