# models/contact.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.models.enums import ContactStatus


@dataclass
class ContactMessage:
    """Contact form submission"""
    first_name: str
    last_name: str
    email: str
    message: str
    company: str = ""
    status: ContactStatus = ContactStatus.NEW
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    _id: Optional[ObjectId] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self._id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "company": self.company,
            "message": self.message,
            "status": self.status.value,
            "created_at": self.created_at,
            "responded_at": self.responded_at
        }
