#middleware/response_middleware
import logging
from typing import Any, Dict, List, Optional

from flask import jsonify, make_response, request

logger = logging.getLogger(__name__)


class ResponseMiddleware:

    @staticmethod
    def create_error_response(error: str, status_code: int = 400, message: Optional[str] = None,
                              details: Optional[List[str]] = None):
        """
        Unified error response: {error, message?, details?}
        """
        error_data: Dict[str, Any] = {'error': error}
        if message:
            error_data['message'] = message
        if details:
            error_data['details'] = details

        if status_code >= 500:
            logger.error(f"API Error {status_code}: {error} - {request.method} {request.path}")
        else:
            logger.warning(f"API Error {status_code}: {error} - {request.method} {request.path}")
        return make_response(jsonify(error_data), status_code)

    @staticmethod
    def create_success_response(data: Dict[str, Any], status_code: int = 200):
        """Plain JSON body with the given status"""
        return make_response(jsonify(data), status_code)


response_middleware = ResponseMiddleware()
