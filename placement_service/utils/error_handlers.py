from flask import jsonify
from werkzeug.exceptions import HTTPException
import logging

from placement_service.utils.exceptions import InventoryError
from placement_service.utils.responses import error_response, internal_error_response

logger = logging.getLogger(__name__)


def _envelope(message, status_code):
    body, code = error_response(message, status_code)
    return jsonify(body), code


def register_error_handlers(app):
    """Register application error handlers"""

    @app.errorhandler(404)
    def not_found(error):
        return _envelope('Route not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return _envelope('Method not allowed', 405)

    @app.errorhandler(InventoryError)
    def inventory_error(error):
        return _envelope(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def http_exception(error):
        return _envelope(error.description, error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        logger.exception(f"Global error handler: {error}")
        body, code = internal_error_response()
        return jsonify(body), code
