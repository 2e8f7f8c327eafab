"""
Authentication Routes
Handles registration, login and email verification
"""

import logging

from flask import Blueprint, request

from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import ValidationError
from securetag.services.container import get_services
from securetag.validators import AuthValidator, normalize_email

auth_bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account; the user must verify their email before logging in"""
    validation = AuthValidator.validate_registration_data(request.get_json(silent=True))
    if not validation['valid']:
        raise ValidationError(errors=validation['errors'])

    result = get_services().auth.register_user(validation['cleaned_data'])
    return response_middleware.create_success_response(result, 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    error = AuthValidator.validate_login_data(data)
    if error:
        raise ValidationError(error)

    email = normalize_email(data['email'])
    if email is None:
        raise ValidationError("Please provide a valid email address")

    result = get_services().auth.authenticate(email, data['password'])
    return response_middleware.create_success_response({
        'message': 'Login successful',
        'token': result['token'],
        'expiresAt': result['expires_at'],
        'user': result['user']
    })


@auth_bp.route('/verify-email', methods=['POST'])
def verify_email():
    data = request.get_json(silent=True) or {}
    result = get_services().auth.verify_email(data.get('token'))
    return response_middleware.create_success_response(result)
