# models/verification.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.models.enums import VerificationMethod, VerificationResult
from securetag.models.product import Coordinates


@dataclass
class Location:
    """Caller-supplied location; advisory only"""
    country: str = ""
    state: str = ""
    city: str = ""
    coordinates: Coordinates = field(default_factory=Coordinates)
    ip_address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "coordinates": self.coordinates.to_dict(),
            "ip_address": self.ip_address
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Location':
        data = data or {}
        return cls(
            country=str(data.get("country") or ""),
            state=str(data.get("state") or ""),
            city=str(data.get("city") or ""),
            coordinates=Coordinates.from_dict(data.get("coordinates")),
            ip_address=str(data.get("ip_address") or data.get("ipAddress") or "")
        )


@dataclass
class DeviceInfo:
    user_agent: str = ""
    platform: str = ""
    browser: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_agent": self.user_agent,
            "platform": self.platform,
            "browser": self.browser
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DeviceInfo':
        data = data or {}
        return cls(
            user_agent=str(data.get("user_agent") or data.get("userAgent") or ""),
            platform=str(data.get("platform") or ""),
            browser=str(data.get("browser") or "")
        )


@dataclass(frozen=True)
class VerificationRecord:
    """One verification attempt; written once, never updated"""
    product_id: str
    method: VerificationMethod
    result: VerificationResult
    confidence: Optional[int] = None
    product_ref: Optional[ObjectId] = None
    manufacturer_id: Optional[ObjectId] = None
    verifier_id: Optional[ObjectId] = None
    location: Location = field(default_factory=Location)
    device_info: DeviceInfo = field(default_factory=DeviceInfo)
    timestamp: Optional[datetime] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)
    _id: Optional[ObjectId] = None

    def __post_init__(self):
        if self.confidence is not None and not 0 <= self.confidence <= 100:
            raise ValueError("confidence must be between 0 and 100")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database storage"""
        return {
            "_id": self._id,
            "product_id": self.product_id,
            "product": self.product_ref,
            "manufacturer_id": self.manufacturer_id,
            "verifier": self.verifier_id,
            "method": self.method.value,
            "location": self.location.to_dict(),
            "device_info": self.device_info.to_dict(),
            "result": self.result.value,
            "confidence": self.confidence,
            "timestamp": self.timestamp,
            "additional_data": self.additional_data
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> 'VerificationRecord':
        return cls(
            _id=doc.get("_id"),
            product_id=doc["product_id"],
            product_ref=doc.get("product"),
            manufacturer_id=doc.get("manufacturer_id"),
            verifier_id=doc.get("verifier"),
            method=VerificationMethod(doc["method"]),
            location=Location.from_dict(doc.get("location")),
            device_info=DeviceInfo.from_dict(doc.get("device_info")),
            result=VerificationResult(doc["result"]),
            confidence=doc.get("confidence"),
            timestamp=doc.get("timestamp"),
            additional_data=doc.get("additional_data") or {}
        )
