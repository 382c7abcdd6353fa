"""
Models package - Database models for the placement service
"""

# Import database instance
from placement_service.shared.database import db

# Import models
from .inventory_record import InventoryRecord, LISTING_FIELDS
from .storage_cell import StorageCell

# Export all models
__all__ = [
    'db',
    'InventoryRecord',
    'LISTING_FIELDS',
    'StorageCell'
]
