"""
Correlation ID middleware for Flask application
Tags every request and its log lines with an X-Correlation-ID
"""
import uuid
import logging
from contextvars import ContextVar
from flask import Response, g, request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = 'X-Correlation-ID'

# Context variable to store correlation ID for the current request
correlation_id_context: ContextVar[str] = ContextVar('correlation_id', default='')


class CorrelationIdMiddleware:
    """
    Flask middleware for handling correlation IDs and request logging
    """

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize the middleware with Flask app"""
        app.before_request(self.before_request)
        app.after_request(self.after_request)

    def before_request(self):
        """Extract or generate correlation ID before request processing"""
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        g.correlation_id = correlation_id
        correlation_id_context.set(correlation_id)

        logger.info(f"{request.method} {request.full_path.rstrip('?')}")

    def after_request(self, response: Response) -> Response:
        """Add correlation ID to response headers"""
        correlation_id = getattr(g, 'correlation_id', 'unknown')
        response.headers[CORRELATION_HEADER] = correlation_id

        logger.info(f"{request.method} {request.path} - Response: {response.status_code}")
        return response


class CorrelationIdFilter(logging.Filter):
    """Stamp log records with the correlation ID of the current request"""

    def filter(self, record):
        record.correlation_id = get_correlation_id()
        return True


def get_correlation_id() -> str:
    """Get current correlation ID from Flask g object or context"""
    try:
        correlation_id = getattr(g, 'correlation_id', None)
    except RuntimeError:
        # Outside of a request context
        correlation_id = None
    return correlation_id or correlation_id_context.get() or '-'


def init_correlation_id_logging(level='INFO'):
    """
    Configure root logging with the correlation ID in every line
    """
    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(correlation_id)s] %(levelname)s %(name)s: %(message)s'
    ))
    logging.basicConfig(level=getattr(logging, level, logging.INFO), handlers=[handler], force=True)
