"""
Product Service
Product registration with tag identity and QR code, plus paginated listing
"""

import logging
import math
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.core.exceptions import ConflictError
from securetag.models import Origin, Product, SecureTag, UserRole
from securetag.services import tag_service
from securetag.stores.base import Store
from securetag.utils.date_helpers import utc_now

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 3
MAX_PAGE_SIZE = 100


class ProductService:
    """Product registration and listing for manufacturers"""

    def __init__(self, store: Store):
        self.store = store

    def create_product(self, manufacturer_id: ObjectId, cleaned: Dict[str, Any]) -> Product:
        """
        Register a product with a fresh tag identity and QR code

        Args:
            manufacturer_id: Owner of the product
            cleaned: Output of ProductValidator.validate_registration
        """
        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            identity = tag_service.generate()
            product_id = tag_service.generate_product_id()
            now = utc_now()

            product = Product(
                product_id=product_id,
                name=cleaned['name'],
                description=cleaned['description'],
                category=cleaned['category'],
                price=cleaned['price'],
                batch_number=cleaned['batch_number'],
                serial_number=cleaned['serial_number'],
                manufacturer_id=manufacturer_id,
                manufacturing_date=cleaned['manufacturing_date'],
                expiry_date=cleaned['expiry_date'],
                origin=Origin.from_dict(cleaned['origin']),
                secure_tag=SecureTag(
                    qr_code=tag_service.render_qr_code(tag_service.encode(product_id, identity.secret_key)),
                    nfc_id=identity.tag_id,
                    tamper_seal=identity.tamper_seal,
                    secret_key=identity.secret_key
                ),
                created_at=now,
                updated_at=now
            )

            try:
                product = self.store.insert_product(product)
            except ConflictError:
                logger.warning(f"Product id collision on attempt {attempt}: {product_id}")
                continue

            logger.info(f"Product {product.product_id} registered by manufacturer {manufacturer_id}")
            return product

        raise ConflictError("Could not allocate a unique product identifier")

    def list_products(self, user_id: ObjectId, role: UserRole, page: int = 1, limit: int = 10,
                      search: Optional[str] = None, category: Optional[str] = None,
                      status: Optional[str] = None) -> Dict[str, Any]:
        """Paginated product list; admins see all products, others only their own"""
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        owner = None if role == UserRole.ADMIN else user_id

        products, total = self.store.list_products(
            manufacturer_id=owner,
            search=search,
            category=category,
            status=status,
            page=page,
            limit=limit
        )

        return {
            'products': [product.to_public_dict() for product in products],
            'totalPages': math.ceil(total / limit),
            'currentPage': page,
            'total': total
        }
