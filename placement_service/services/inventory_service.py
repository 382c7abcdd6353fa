"""
Inventory Service - Business rules for placing, removing and correcting stock
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from placement_service.models import InventoryRecord
from placement_service.repositories import InventoryRecordRepository
from placement_service.clients import DatabaseCellResolver
from placement_service.utils.exceptions import (
    CellNotFoundError,
    InsufficientQuantityError,
    MissingSearchParameterError,
    RecordNotFoundError,
)
from placement_service.utils.schemas import (
    AddRecordSchema,
    CellSearchSchema,
    InventoryRequestSchema,
    LikeSearchSchema,
    MinimalRecordSchema,
    RemovalRequestSchema,
    UpdateRecordSchema,
    load_request,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 1000
MAX_PAGE_LIMIT = 10000

add_record_schema = AddRecordSchema()
minimal_record_schema = MinimalRecordSchema()
removal_schema = RemovalRequestSchema()
inventory_schema = InventoryRequestSchema()
update_record_schema = UpdateRecordSchema()
cell_search_schema = CellSearchSchema()
like_search_schema = LikeSearchSchema()


def normalize_pagination(limit: Optional[int], offset: Optional[int],
                         default_limit: int = DEFAULT_PAGE_LIMIT,
                         max_limit: int = MAX_PAGE_LIMIT) -> Dict[str, int]:
    """Apply the listing defaults: missing or non-positive limit -> default, capped; offset floored at 0"""
    if not limit or limit <= 0:
        limit = default_limit
    return {
        'limit': min(limit, max_limit),
        'offset': max(offset or 0, 0)
    }


class InventoryService:
    """Business logic for cell placement inventory"""

    def __init__(self, repository=None, cell_resolver=None):
        self.inventory_repo = repository or InventoryRecordRepository()
        self.cell_resolver = cell_resolver or DatabaseCellResolver()

    def _resolve_cell_name(self, cell_barcode: str) -> str:
        cell_name = self.cell_resolver.resolve(cell_barcode)
        if not cell_name:
            raise CellNotFoundError(cell_barcode)
        return cell_name

    def add_record(self, payload: Dict[str, Any]) -> InventoryRecord:
        """
        Place a quantity of a product into a cell

        Every call inserts a new row, even when one with the same
        product, cell and condition already exists.
        """
        data = load_request(add_record_schema, payload)
        cell_name = self._resolve_cell_name(data['cell_barcode'])

        record = InventoryRecord(
            product_barcode=data['product_barcode'],
            product_name=data['product_name'],
            cell_barcode=data['cell_barcode'],
            cell_name=cell_name,
            quantity=data['quantity'],
            condition=data['condition'],
            reason=data['reason'],
            executor=data['executor'],
            created_at=datetime.utcnow(),
            updated_at=None
        )
        record = self.inventory_repo.create(record)
        logger.info(f"Record inserted successfully with ID: {record.id}")
        return record

    def add_minimal_record(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Register a product that has not been shelved yet"""
        data = load_request(minimal_record_schema, payload)

        record = InventoryRecord(
            product_barcode=data['product_barcode'],
            product_name=data['product_name'],
            cell_barcode='',
            cell_name='',
            quantity=0,
            condition=None,
            reason=None,
            executor=None,
            created_at=datetime.utcnow(),
            updated_at=None
        )
        record = self.inventory_repo.create(record)
        logger.info(f"Minimal record inserted successfully with ID: {record.id}")

        result = record.to_dict()
        return {key: result[key] for key in ('id', 'shk', 'name', 'date')}

    def remove_items(self, payload: Dict[str, Any]) -> None:
        """
        Take stock out of a cell (snyatie)

        Picks the oldest record for (shk, wr_shk, condition) holding at least
        the requested quantity. Exhausting it deletes the row, otherwise the
        quantity is decremented. The write is conditional on the quantity seen
        at lookup, so a concurrent removal cannot spend the same stock twice.
        """
        data = load_request(removal_schema, payload)
        requested = data['quantity']

        record = self.inventory_repo.find_for_removal(
            product_barcode=data['product_barcode'],
            cell_barcode=data['cell_barcode'],
            condition=data['condition'],
            quantity=requested
        )
        if not record:
            raise InsufficientQuantityError()

        record_id, stored = record.id, record.quantity
        if requested == stored:
            applied = self.inventory_repo.delete(record_id, expected_quantity=stored)
            if applied:
                logger.info(f"Record with ID {record_id} deleted completely")
        else:
            applied = self.inventory_repo.decrement_quantity(record_id, stored, requested)
            if applied:
                logger.info(f"Record with ID {record_id} updated: {stored} -> {stored - requested}")

        if not applied:
            logger.warning(f"Record with ID {record_id} changed during removal, nothing written")
            raise InsufficientQuantityError()

    def perform_inventory(self, payload: Dict[str, Any]) -> None:
        """
        Correct a counted quantity

        Targets the most recently created record for (shk, wr_shk, condition).
        The quantity is absolute: 0 deletes the record, anything else
        overwrites quantity, condition and reason.
        """
        data = load_request(inventory_schema, payload)

        record = self.inventory_repo.find_for_inventory(
            product_barcode=data['product_barcode'],
            cell_barcode=data['cell_barcode'],
            condition=data['condition']
        )
        if not record:
            raise RecordNotFoundError('Запись не найдена')

        record_id = record.id
        if data['quantity'] == 0:
            applied = self.inventory_repo.delete(record_id)
            action = 'deleted during inventory'
        else:
            applied = self.inventory_repo.apply_changes(record_id, {
                'quantity': data['quantity'],
                'condition': data['condition'],
                'reason': data['reason']
            })
            action = f"updated during inventory: kolvo={data['quantity']}"

        if not applied:
            raise RecordNotFoundError('Запись не найдена')
        logger.info(f"Record with ID {record_id} {action}")

    def update_record(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Assign a record to a cell with a new quantity; optional fields change only when supplied"""
        data = load_request(update_record_schema, payload)
        record_id = data['id']

        if not self.inventory_repo.get_by_id(record_id):
            raise RecordNotFoundError(f"Record with ID {record_id} not found")

        cell_name = self._resolve_cell_name(data['cell_barcode'])

        changes = {
            'cell_barcode': data['cell_barcode'],
            'cell_name': cell_name,
            'quantity': data['quantity'],
        }
        for key in ('executor', 'condition', 'reason'):
            if key in data:
                changes[key] = data[key]

        if not self.inventory_repo.apply_changes(record_id, changes):
            raise RecordNotFoundError(f"Record with ID {record_id} not found")

        updated = self.inventory_repo.get_by_id(record_id).to_dict()
        logger.info(f"Record with ID {record_id} updated successfully")
        return {
            key: updated[key]
            for key in ('id', 'wr_shk', 'wr_name', 'kolvo', 'ispolnitel', 'condition', 'reason', 'date_upd')
        }

    def get_placed(self) -> List[Dict[str, Any]]:
        """All placed items (razmeshennye)"""
        items = self.inventory_repo.get_placed()
        logger.info(f"Retrieved {len(items)} razmeshennye records")
        return [item.to_listing_dict() for item in items]

    def get_unplaced(self) -> List[Dict[str, Any]]:
        """All unplaced items (nerazmeshennye)"""
        items = self.inventory_repo.get_unplaced()
        logger.info(f"Retrieved {len(items)} nerazmeshennye records")
        return [item.to_listing_dict() for item in items]

    def search_by_cell(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = load_request(cell_search_schema, params)
        if not data['cell_barcode']:
            raise MissingSearchParameterError('Параметр wr_shk обязателен')

        items = self.inventory_repo.search_by_cell(data['cell_barcode'])
        logger.info(f"Found {len(items)} records for wr_shk: {data['cell_barcode']}")
        return [item.to_listing_dict() for item in items]

    def search_like(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        terms = load_request(like_search_schema, params)
        if not terms:
            raise MissingSearchParameterError(
                'Необходимо указать хотя бы один параметр поиска (wr_name, wr_shk, shk, name)'
            )

        items = self.inventory_repo.search_like(**terms)
        logger.info(f"Found {len(items)} records for search params: {terms}")
        return [item.to_listing_dict() for item in items]

    def get_all_records(self, limit: Optional[int] = None, offset: Optional[int] = None,
                        default_limit: int = DEFAULT_PAGE_LIMIT,
                        max_limit: int = MAX_PAGE_LIMIT) -> Dict[str, Any]:
        """Every record with every field, newest first, one page at a time"""
        options = normalize_pagination(limit, offset, default_limit, max_limit)
        items, total = self.inventory_repo.get_all(**options)

        logger.info(
            f"Retrieved {len(items)} records (offset: {options['offset']}, "
            f"limit: {options['limit']}) from total {total}"
        )
        return {
            'items': [item.to_dict() for item in items],
            'pagination': {
                'total': total,
                'limit': options['limit'],
                'offset': options['offset'],
                'hasMore': options['offset'] + options['limit'] < total
            }
        }
