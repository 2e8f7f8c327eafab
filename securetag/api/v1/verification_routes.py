"""
Public Verification Routes
QR scan and NFC tap verification - no authentication required
"""

import logging
from typing import Any, Dict

from flask import Blueprint, g, request

from securetag.api.middleware.auth_middleware import auth_middleware
from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import ValidationError
from securetag.models import DeviceInfo, Location
from securetag.services.container import get_services
from securetag.validators import validate_verification_request

verification_bp = Blueprint('verification', __name__)
logger = logging.getLogger(__name__)


def _client_ip() -> str:
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or ''


def _context(data: Dict[str, Any]):
    """Location and device details, filled from the request where the caller left them out"""
    location = Location.from_dict(data.get('location'))
    if not location.ip_address:
        location.ip_address = _client_ip()

    device_info = DeviceInfo.from_dict(data.get('deviceInfo'))
    if not device_info.user_agent:
        device_info.user_agent = request.headers.get('User-Agent', '')

    return location, device_info


def _parse(credential_field: str) -> Dict[str, Any]:
    data = request.get_json(silent=True)
    error = validate_verification_request(data, credential_field)
    if error:
        raise ValidationError(error)
    return data


@verification_bp.route('/qr', methods=['POST'])
@auth_middleware.optional_auth
def verify_qr():
    """
    Verify a scanned QR payload
    Counterfeit outcomes are returned as {result: counterfeit, message} with 400/404
    """
    data = _parse('qrData')
    location, device_info = _context(data)

    result = get_services().verification.verify_qr(
        data['qrData'],
        location=location,
        device_info=device_info,
        verifier_id=g.current_user_id
    )
    return response_middleware.create_success_response(result)


@verification_bp.route('/nfc', methods=['POST'])
@auth_middleware.optional_auth
def verify_nfc():
    """Verify a tapped NFC tag"""
    data = _parse('nfcId')
    location, device_info = _context(data)

    result = get_services().verification.verify_nfc(
        data['nfcId'].strip(),
        location=location,
        device_info=device_info,
        verifier_id=g.current_user_id
    )
    return response_middleware.create_success_response(result)
