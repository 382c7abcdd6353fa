"""
Services package - Business logic layer
"""

from .inventory_service import InventoryService, normalize_pagination

__all__ = [
    'InventoryService',
    'normalize_pagination'
]
