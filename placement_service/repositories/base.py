"""
Base Repository Interface - Abstract base classes
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple
from placement_service.models import InventoryRecord


class InventoryRecordRepositoryInterface(ABC):
    """Abstract base class for inventory record repository"""

    @abstractmethod
    def create(self, record: InventoryRecord) -> InventoryRecord:
        pass

    @abstractmethod
    def get_by_id(self, record_id: int) -> Optional[InventoryRecord]:
        pass

    @abstractmethod
    def find_for_removal(self, product_barcode: str, cell_barcode: str, condition: str,
                         quantity: int) -> Optional[InventoryRecord]:
        pass

    @abstractmethod
    def find_for_inventory(self, product_barcode: str, cell_barcode: str,
                           condition: str) -> Optional[InventoryRecord]:
        pass

    @abstractmethod
    def decrement_quantity(self, record_id: int, expected_quantity: int, amount: int) -> bool:
        pass

    @abstractmethod
    def apply_changes(self, record_id: int, changes: Dict) -> bool:
        pass

    @abstractmethod
    def delete(self, record_id: int, expected_quantity: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    def get_placed(self) -> List[InventoryRecord]:
        pass

    @abstractmethod
    def get_unplaced(self) -> List[InventoryRecord]:
        pass

    @abstractmethod
    def search_by_cell(self, cell_barcode: str) -> List[InventoryRecord]:
        pass

    @abstractmethod
    def search_like(self, **terms) -> List[InventoryRecord]:
        pass

    @abstractmethod
    def get_all(self, limit: int, offset: int) -> Tuple[List[InventoryRecord], int]:
        pass
