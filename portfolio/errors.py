"""
Error Handlers

Every error leaves the app as JSON: {error, message, status}.
"""

import logging

from flask import jsonify

from portfolio.extensions import db
from portfolio.storage import BlobStoreError

logger = logging.getLogger(__name__)

ERRORS = {
    400: ('bad_request', 'The request is malformed or invalid'),
    401: ('unauthorized', 'Authentication is required'),
    403: ('forbidden', 'You do not have permission to access this resource'),
    404: ('not_found', 'The requested resource does not exist'),
    405: ('method_not_allowed', 'The HTTP method is not allowed for this endpoint'),
}


def _error_response(status, message=None):
    code, default_message = ERRORS.get(status, ('internal_error', 'An internal error occurred'))
    return jsonify({'error': code, 'message': message or default_message, 'status': status}), status


def register_error_handlers(app):
    def http_error(error):
        description = error.description if error.description != type(error).description else None
        return _error_response(error.code, description)

    for status in ERRORS:
        app.register_error_handler(status, http_error)

    @app.errorhandler(BlobStoreError)
    def blob_store_error(error):
        logger.error('Blob store error: %s', error)
        return _error_response(500, 'Storage unavailable')

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        logger.error('Unhandled error: %s', getattr(error, 'original_exception', error), exc_info=True)
        return _error_response(500)
