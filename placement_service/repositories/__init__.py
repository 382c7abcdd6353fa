"""
Repositories package - Data access layer for the placement service
"""

# Import interfaces
from .base import InventoryRecordRepositoryInterface

# Import concrete implementations
from .inventory_repository import InventoryRecordRepository

# Export all interfaces and implementations
__all__ = [
    'InventoryRecordRepositoryInterface',
    'InventoryRecordRepository'
]
