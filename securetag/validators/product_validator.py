# validators/product_validator.py
from typing import Any, Dict

from securetag.utils.date_helpers import parse_iso_datetime

MAX_NAME_LENGTH = 200


class ProductValidator:
    """Validation for product registration"""

    @staticmethod
    def validate_registration(data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate product registration data"""
        errors = []
        data = data if isinstance(data, dict) else {}

        name = data.get('name')
        if not isinstance(name, str) or not name.strip():
            errors.append("name is required")
            name = ''
        elif len(name.strip()) > MAX_NAME_LENGTH:
            errors.append(f"name cannot exceed {MAX_NAME_LENGTH} characters")

        manufacturing_date = None
        if not data.get('manufacturingDate'):
            errors.append("manufacturingDate is required")
        else:
            try:
                manufacturing_date = parse_iso_datetime(data['manufacturingDate'])
            except ValueError:
                errors.append("manufacturingDate must be an ISO-8601 date")

        expiry_date = None
        if data.get('expiryDate'):
            try:
                expiry_date = parse_iso_datetime(data['expiryDate'])
            except ValueError:
                errors.append("expiryDate must be an ISO-8601 date")

        if manufacturing_date and expiry_date and expiry_date < manufacturing_date:
            errors.append("expiryDate cannot be before manufacturingDate")

        price = None
        if data.get('price') not in (None, ''):
            try:
                price = float(data['price'])
                if price < 0:
                    errors.append("Price cannot be negative")
            except (ValueError, TypeError):
                errors.append("Price must be a valid number")

        origin = data.get('origin') or {}
        if not isinstance(origin, dict):
            errors.append("origin must be an object")
            origin = {}

        def text(field: str) -> str:
            value = data.get(field)
            return value.strip() if isinstance(value, str) else ''

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'cleaned_data': {
                'name': name.strip(),
                'description': text('description'),
                'category': text('category'),
                'price': price,
                'manufacturing_date': manufacturing_date,
                'expiry_date': expiry_date,
                'batch_number': text('batchNumber'),
                'serial_number': text('serialNumber'),
                'origin': origin
            }
        }
