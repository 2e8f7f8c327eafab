# models/product.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.models.enums import ProductStatus
from securetag.utils.date_helpers import isoformat_or_none


@dataclass
class Coordinates:
    lat: Optional[float] = None
    lng: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Coordinates':
        data = data or {}
        return cls(lat=data.get("lat"), lng=data.get("lng"))


@dataclass
class Origin:
    country: str = ""
    state: str = ""
    city: str = ""
    coordinates: Coordinates = field(default_factory=Coordinates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "coordinates": self.coordinates.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Origin':
        data = data or {}
        return cls(
            country=data.get("country") or "",
            state=data.get("state") or "",
            city=data.get("city") or "",
            coordinates=Coordinates.from_dict(data.get("coordinates"))
        )


@dataclass
class SecureTag:
    """Credentials bound to one physical product"""
    qr_code: str = ""
    nfc_id: str = ""
    tamper_seal: str = ""
    is_active: bool = True
    secret_key: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "qr_code": self.qr_code,
            "nfc_id": self.nfc_id,
            "tamper_seal": self.tamper_seal,
            "is_active": self.is_active,
            "secret_key": self.secret_key
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SecureTag':
        data = data or {}
        return cls(
            qr_code=data.get("qr_code", ""),
            nfc_id=data.get("nfc_id", ""),
            tamper_seal=data.get("tamper_seal", ""),
            is_active=data.get("is_active", True),
            secret_key=data.get("secret_key", "")
        )


@dataclass
class Product:
    """Product registered by a manufacturer and tagged for verification"""
    _id: Optional[ObjectId] = None

    # Identification
    product_id: str = ""
    name: str = ""
    description: str = ""
    category: str = ""
    batch_number: str = ""
    serial_number: str = ""
    price: Optional[float] = None

    # Manufacturer
    manufacturer_id: Optional[ObjectId] = None

    # Provenance
    manufacturing_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    origin: Origin = field(default_factory=Origin)

    secure_tag: SecureTag = field(default_factory=SecureTag)

    # Lifecycle
    status: ProductStatus = ProductStatus.ACTIVE
    verification_count: int = 0
    last_verified: Optional[datetime] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database storage"""
        return {
            "_id": self._id,
            "product_id": self.product_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "batch_number": self.batch_number,
            "serial_number": self.serial_number,
            "price": self.price,
            "manufacturer_id": self.manufacturer_id,
            "manufacturing_date": self.manufacturing_date,
            "expiry_date": self.expiry_date,
            "origin": self.origin.to_dict(),
            "secure_tag": self.secure_tag.to_dict(),
            "status": self.status.value,
            "verification_count": self.verification_count,
            "last_verified": self.last_verified,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> 'Product':
        """Build from a stored document"""
        return cls(
            _id=doc.get("_id"),
            product_id=doc.get("product_id", ""),
            name=doc.get("name", ""),
            description=doc.get("description") or "",
            category=doc.get("category") or "",
            batch_number=doc.get("batch_number") or "",
            serial_number=doc.get("serial_number") or "",
            price=doc.get("price"),
            manufacturer_id=doc.get("manufacturer_id"),
            manufacturing_date=doc.get("manufacturing_date"),
            expiry_date=doc.get("expiry_date"),
            origin=Origin.from_dict(doc.get("origin")),
            secure_tag=SecureTag.from_dict(doc.get("secure_tag")),
            status=ProductStatus(doc.get("status", ProductStatus.ACTIVE.value)),
            verification_count=doc.get("verification_count", 0),
            last_verified=doc.get("last_verified"),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at")
        )

    def to_public_dict(self) -> Dict[str, Any]:
        """Client-facing view; the tag secret and tamper seal never leave the server"""
        return {
            "id": str(self._id) if self._id else None,
            "productId": self.product_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "batchNumber": self.batch_number,
            "serialNumber": self.serial_number,
            "manufacturer": str(self.manufacturer_id) if self.manufacturer_id else None,
            "manufacturingDate": isoformat_or_none(self.manufacturing_date),
            "expiryDate": isoformat_or_none(self.expiry_date),
            "origin": self.origin.to_dict(),
            "secureTag": {
                "qrCode": self.secure_tag.qr_code,
                "nfcId": self.secure_tag.nfc_id,
                "isActive": self.secure_tag.is_active
            },
            "status": self.status.value,
            "verificationCount": self.verification_count,
            "lastVerified": isoformat_or_none(self.last_verified),
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at)
        }
