"""
Clients Module
Centralized exports for the cell name resolvers
"""

from placement_service.clients.cell_resolver import (
    CellResolver,
    DatabaseCellResolver,
    StaticCellResolver
)
from placement_service.clients.cell_service_client import CellServiceClient


def create_cell_resolver(app):
    """Build the resolver selected by CELL_RESOLVER"""
    kind = app.config.get('CELL_RESOLVER', 'database')
    if kind == 'http':
        return CellServiceClient(
            base_url=app.config.get('CELL_SERVICE_URL'),
            timeout=app.config.get('CELL_SERVICE_TIMEOUT')
        )
    if kind == 'static':
        return StaticCellResolver()
    if kind == 'database':
        return DatabaseCellResolver()
    raise ValueError(f"Unknown CELL_RESOLVER '{kind}'")


def init_cell_resolver(app):
    """Attach the configured resolver to the app"""
    resolver = create_cell_resolver(app)
    app.extensions['cell_resolver'] = resolver
    return resolver


__all__ = [
    'CellResolver',
    'DatabaseCellResolver',
    'StaticCellResolver',
    'CellServiceClient',
    'create_cell_resolver',
    'init_cell_resolver',
]
