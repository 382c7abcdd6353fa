import pytest
from datetime import datetime

from placement_service.models import InventoryRecord, LISTING_FIELDS
from tests.conftest import create_test_record, create_unplaced_record


class TestInventoryRecordModel:
    """Test InventoryRecord model."""

    def test_create_record(self, db_session):
        """Test creating a record stamps the creation date only."""
        record = InventoryRecord(product_barcode='P001', product_name='Test Product',
                                 cell_barcode='A1', cell_name='Cell A1', quantity=3)
        db_session.add(record)
        db_session.commit()

        assert record.id is not None
        assert record.created_at is not None
        assert record.updated_at is None

    def test_to_dict_uses_wire_names(self, db_session):
        """Test dictionary conversion keeps the table's column names."""
        created = datetime(2024, 3, 1, 12, 30, 0)
        record = create_test_record(db_session, created_at=created, reason='restock')

        data = record.to_dict()

        assert data == {
            'id': record.id,
            'shk': 'P001',
            'name': 'Test Product',
            'wr_shk': 'A1',
            'wr_name': 'Cell A1',
            'kolvo': 10,
            'condition': 'new',
            'reason': 'restock',
            'ispolnitel': 'tester',
            'date': '2024-03-01T12:30:00',
            'date_upd': None
        }

    def test_to_listing_dict(self, db_session):
        """Test the listing projection drops id, executor and dates."""
        record = create_test_record(db_session)

        data = record.to_listing_dict()

        assert tuple(data.keys()) == LISTING_FIELDS
        assert 'id' not in data
        assert 'ispolnitel' not in data


class TestPlacementPredicates:
    """Test the placed/unplaced classification."""

    @pytest.mark.parametrize('fields, placed, unplaced', [
        ({'quantity': 5, 'cell_barcode': 'A1', 'cell_name': 'Cell A1'}, True, False),
        ({'quantity': 0, 'cell_barcode': '', 'cell_name': ''}, False, True),
        ({'quantity': 0, 'cell_barcode': None, 'cell_name': None}, False, True),
        ({'quantity': 0, 'cell_barcode': 'A1', 'cell_name': 'Cell A1'}, False, False),
        ({'quantity': 5, 'cell_barcode': '', 'cell_name': ''}, False, False),
        ({'quantity': 5, 'cell_barcode': 'A1', 'cell_name': ''}, False, False),
    ])
    def test_python_predicates(self, fields, placed, unplaced):
        """Test predicates evaluated on an instance."""
        record = InventoryRecord(product_barcode='P', product_name='N', **fields)

        assert record.is_placed is placed
        assert record.is_unplaced is unplaced

    def test_sql_predicates_match_python(self, db_session):
        """Test the SQL expressions classify the same rows."""
        placed = create_test_record(db_session)
        unplaced = create_unplaced_record(db_session)
        create_test_record(db_session, quantity=0)
        create_test_record(db_session, cell_barcode='', cell_name='')

        placed_ids = [r.id for r in InventoryRecord.query.filter(InventoryRecord.is_placed)]
        unplaced_ids = [r.id for r in InventoryRecord.query.filter(InventoryRecord.is_unplaced)]

        assert placed_ids == [placed.id]
        assert unplaced_ids == [unplaced.id]
