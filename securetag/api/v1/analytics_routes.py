"""
Analytics Routes
Dashboard report and daily counters for manufacturers and admins
"""

import logging

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, g, request

from securetag.api.middleware.auth_middleware import auth_middleware
from securetag.api.middleware.response_middleware import response_middleware
from securetag.core.exceptions import PermissionDenied, ValidationError
from securetag.models import UserRole
from securetag.services.container import get_services
from securetag.utils.date_helpers import DEFAULT_PERIOD

analytics_bp = Blueprint('analytics', __name__)
logger = logging.getLogger(__name__)

MAX_DAILY_WINDOW = 366


@analytics_bp.route('/dashboard', methods=['GET'])
@auth_middleware.token_required
def dashboard():
    """Verification report for 7d, 30d, 90d or 1y (default 30d)"""
    period = request.args.get('period', DEFAULT_PERIOD)
    report = get_services().analytics.dashboard(g.current_user_id, g.current_user_role, period)
    return response_middleware.create_success_response(report)


@analytics_bp.route('/daily', methods=['GET'])
@auth_middleware.token_required
def daily():
    """
    Daily verification counters for the caller
    Admins may inspect another manufacturer with ?manufacturerId=
    """
    try:
        days = int(request.args.get('days', 30))
    except ValueError:
        raise ValidationError("days must be an integer")
    if not 1 <= days <= MAX_DAILY_WINDOW:
        raise ValidationError(f"days must be between 1 and {MAX_DAILY_WINDOW}")

    manufacturer_id = g.current_user_id
    requested = request.args.get('manufacturerId')
    if requested:
        if g.current_user_role != UserRole.ADMIN:
            raise PermissionDenied("Only admins may view another manufacturer's analytics")
        try:
            manufacturer_id = ObjectId(requested)
        except InvalidId:
            raise ValidationError("manufacturerId is not a valid identifier")

    buckets = get_services().analytics.daily_buckets(manufacturer_id, days)
    return response_middleware.create_success_response({
        'days': days,
        'manufacturer': str(manufacturer_id),
        'buckets': [bucket.to_public_dict() for bucket in buckets]
    })
