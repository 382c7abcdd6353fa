"""
Inventory Record Repository Implementation
"""

from typing import Dict, List, Optional, Tuple
from datetime import datetime
from sqlalchemy import or_
from placement_service.shared.database import db
from placement_service.models import InventoryRecord
from .base import InventoryRecordRepositoryInterface


# Search parameter name -> column searched with a case-insensitive LIKE
LIKE_SEARCH_COLUMNS = {
    'cell_name': InventoryRecord.cell_name,
    'cell_barcode': InventoryRecord.cell_barcode,
    'product_barcode': InventoryRecord.product_barcode,
    'product_name': InventoryRecord.product_name,
}


def _newest_first(query):
    return query.order_by(InventoryRecord.created_at.desc(), InventoryRecord.id.desc())


def _escape_like(term: str) -> str:
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


class InventoryRecordRepository(InventoryRecordRepositoryInterface):
    """SQLAlchemy implementation of the inventory record repository"""

    def create(self, record: InventoryRecord) -> InventoryRecord:
        """Insert a new record"""
        try:
            db.session.add(record)
            db.session.commit()
            return record
        except Exception:
            db.session.rollback()
            raise

    def get_by_id(self, record_id: int) -> Optional[InventoryRecord]:
        """Get record by ID"""
        return db.session.get(InventoryRecord, record_id)

    def find_for_removal(self, product_barcode: str, cell_barcode: str, condition: str,
                         quantity: int) -> Optional[InventoryRecord]:
        """Oldest record for the identity holding at least `quantity`"""
        return InventoryRecord.query.filter(
            InventoryRecord.product_barcode == product_barcode,
            InventoryRecord.cell_barcode == cell_barcode,
            InventoryRecord.condition == condition,
            InventoryRecord.quantity >= quantity
        ).order_by(InventoryRecord.created_at.asc(), InventoryRecord.id.asc()).first()

    def find_for_inventory(self, product_barcode: str, cell_barcode: str,
                           condition: str) -> Optional[InventoryRecord]:
        """Most recently created record for the identity"""
        return _newest_first(InventoryRecord.query.filter(
            InventoryRecord.product_barcode == product_barcode,
            InventoryRecord.cell_barcode == cell_barcode,
            InventoryRecord.condition == condition
        )).first()

    def decrement_quantity(self, record_id: int, expected_quantity: int, amount: int) -> bool:
        """Subtract `amount` only if the stored quantity is still `expected_quantity`"""
        try:
            count = InventoryRecord.query.filter(
                InventoryRecord.id == record_id,
                InventoryRecord.quantity == expected_quantity
            ).update({
                InventoryRecord.quantity: InventoryRecord.quantity - amount,
                InventoryRecord.updated_at: datetime.utcnow()
            }, synchronize_session=False)
            db.session.commit()
            return count > 0
        except Exception:
            db.session.rollback()
            raise

    def apply_changes(self, record_id: int, changes: Dict) -> bool:
        """Overwrite the given attributes and stamp the update time"""
        values = {getattr(InventoryRecord, key): value for key, value in changes.items()}
        values[InventoryRecord.updated_at] = datetime.utcnow()
        try:
            count = InventoryRecord.query.filter(
                InventoryRecord.id == record_id
            ).update(values, synchronize_session=False)
            db.session.commit()
            return count > 0
        except Exception:
            db.session.rollback()
            raise

    def delete(self, record_id: int, expected_quantity: Optional[int] = None) -> bool:
        """Delete record by ID, optionally only while it still holds `expected_quantity`"""
        try:
            query = InventoryRecord.query.filter(InventoryRecord.id == record_id)
            if expected_quantity is not None:
                query = query.filter(InventoryRecord.quantity == expected_quantity)
            count = query.delete(synchronize_session=False)
            db.session.commit()
            return count > 0
        except Exception:
            db.session.rollback()
            raise

    def get_placed(self) -> List[InventoryRecord]:
        """Records with stock in a named cell"""
        return _newest_first(InventoryRecord.query.filter(InventoryRecord.is_placed)).all()

    def get_unplaced(self) -> List[InventoryRecord]:
        """Records waiting to be shelved"""
        return _newest_first(InventoryRecord.query.filter(InventoryRecord.is_unplaced)).all()

    def search_by_cell(self, cell_barcode: str) -> List[InventoryRecord]:
        return _newest_first(InventoryRecord.query.filter(
            InventoryRecord.cell_barcode == cell_barcode
        )).all()

    def search_like(self, **terms) -> List[InventoryRecord]:
        """Case-insensitive substring match, any supplied term may match"""
        conditions = [
            LIKE_SEARCH_COLUMNS[key].ilike(f"%{_escape_like(value)}%", escape='\\')
            for key, value in terms.items()
            if key in LIKE_SEARCH_COLUMNS and value
        ]
        if not conditions:
            return []
        return _newest_first(InventoryRecord.query.filter(or_(*conditions))).all()

    def get_all(self, limit: int, offset: int) -> Tuple[List[InventoryRecord], int]:
        """One page of every record plus the total count"""
        items = _newest_first(InventoryRecord.query).offset(offset).limit(limit).all()
        return items, self.count_total()

    def count_total(self) -> int:
        """Count total inventory records"""
        return InventoryRecord.query.count()
