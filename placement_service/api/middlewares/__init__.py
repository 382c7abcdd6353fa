"""
Request middlewares
"""

from placement_service.api.middlewares.correlation_id import (
    CorrelationIdMiddleware,
    get_correlation_id,
    init_correlation_id_logging
)

__all__ = ['CorrelationIdMiddleware', 'get_correlation_id', 'init_correlation_id_logging']
