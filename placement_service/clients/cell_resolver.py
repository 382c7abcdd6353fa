"""
Cell name resolvers

A resolver maps a warehouse cell barcode to its display name. Unknown
barcodes resolve to None; only genuine lookup failures raise.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from placement_service.models import StorageCell
from placement_service.utils.exceptions import CellResolverError

logger = logging.getLogger(__name__)


class CellResolver(ABC):
    """Abstract base class for cell name lookups"""

    @abstractmethod
    def resolve(self, cell_barcode: str) -> Optional[str]:
        pass


class DatabaseCellResolver(CellResolver):
    """Reads names from the x_Storage_Scklads reference table"""

    def resolve(self, cell_barcode: str) -> Optional[str]:
        try:
            cell = StorageCell.query.filter_by(barcode=cell_barcode).first()
        except SQLAlchemyError as e:
            logger.error(f"Error getting warehouse name for {cell_barcode}: {e}")
            raise CellResolverError(f"Failed to get warehouse name: {e}") from e
        return cell.name if cell else None


class StaticCellResolver(CellResolver):
    """In-memory mapping, used in tests and local development"""

    def __init__(self, cells: Optional[Dict[str, str]] = None):
        self.cells = dict(cells or {})

    def add(self, cell_barcode: str, name: str):
        self.cells[cell_barcode] = name

    def resolve(self, cell_barcode: str) -> Optional[str]:
        return self.cells.get(cell_barcode)
