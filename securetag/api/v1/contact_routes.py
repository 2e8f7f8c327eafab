"""
Contact Routes
Public contact form
"""

import logging

from flask import Blueprint, current_app, request

from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import ValidationError
from securetag.extensions import limiter
from securetag.services.container import get_services
from securetag.validators import ContactValidator

contact_bp = Blueprint('contact', __name__)
logger = logging.getLogger(__name__)


@contact_bp.route('', methods=['POST'])
@limiter.limit(lambda: current_app.config['CONTACT_RATE_LIMIT'])
def submit_contact():
    validation = ContactValidator.validate_contact_form(request.get_json(silent=True))
    if not validation['valid']:
        raise ValidationError(errors=validation['errors'])

    contact = get_services().contact.submit(validation['cleaned_data'])

    return response_middleware.create_success_response({
        'success': True,
        'message': "Thank you for your message! We'll get back to you within 24 hours.",
        'id': str(contact._id)
    }, 201)
