"""
Product Routes
Product registration and listing for authenticated manufacturers
"""

import logging

from flask import Blueprint, g, request

from securetag.api.middleware.auth_middleware import auth_middleware
from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import ValidationError
from securetag.services.container import get_services
from securetag.validators import ProductValidator

product_bp = Blueprint('products', __name__)
logger = logging.getLogger(__name__)


def _int_arg(name: str, default: int) -> int:
    value = request.args.get(name)
    if value in (None, ''):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


@product_bp.route('', methods=['POST'])
@auth_middleware.token_required
def create_product():
    """
    Register a product for the calling manufacturer
    Generates its identifier, tag identity and QR code
    """
    validation = ProductValidator.validate_registration(request.get_json(silent=True))
    if not validation['valid']:
        raise ValidationError(errors=validation['errors'])

    product = get_services().products.create_product(g.current_user_id, validation['cleaned_data'])

    return response_middleware.create_success_response({
        'message': 'Product registered successfully',
        'product': {
            'id': str(product._id),
            'productId': product.product_id,
            'name': product.name,
            'qrCode': product.secure_tag.qr_code,
            'nfcId': product.secure_tag.nfc_id
        }
    }, 201)


@product_bp.route('', methods=['GET'])
@auth_middleware.token_required
def list_products():
    result = get_services().products.list_products(
        g.current_user_id,
        g.current_user_role,
        page=_int_arg('page', 1),
        limit=_int_arg('limit', 10),
        search=request.args.get('search') or None,
        category=request.args.get('category') or None,
        status=request.args.get('status') or None
    )
    return response_middleware.create_success_response(result)
