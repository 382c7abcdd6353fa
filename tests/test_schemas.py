import pytest

from placement_service.utils.exceptions import RequestValidationError
from placement_service.utils.schemas import (
    AddRecordSchema,
    InventoryRequestSchema,
    LikeSearchSchema,
    RemovalRequestSchema,
    UpdateRecordSchema,
    load_request,
)
from tests.conftest import generate_add_data


class TestAddRecordSchema:
    """Test validation of the full add request."""

    def test_valid_payload(self):
        data = load_request(AddRecordSchema(), generate_add_data(reason='restock'))

        assert data == {
            'product_barcode': 'P001',
            'product_name': 'Test Product',
            'cell_barcode': 'A1',
            'quantity': 10,
            'condition': 'new',
            'reason': 'restock',
            'executor': 'tester'
        }

    def test_empty_payload_lists_every_violation(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(AddRecordSchema(), {})

        assert exc_info.value.errors == [
            'shk is required and must be a non-empty string',
            'name is required and must be a non-empty string',
            'wr_shk is required and must be a non-empty string',
            'kolvo is required and must be a positive number',
            'condition is required and must be a non-empty string',
            'ispolnitel is required and must be a non-empty string'
        ]
        assert exc_info.value.message.startswith('Validation failed: shk is required')

    def test_blank_string_rejected(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(AddRecordSchema(), generate_add_data(shk='   '))

        assert exc_info.value.message == 'Validation failed: shk is required and must be a non-empty string'

    @pytest.mark.parametrize('kolvo', [0, -3, 'abc', None, True, 2.7, '2.5'])
    def test_bad_quantity(self, kolvo):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(AddRecordSchema(), generate_add_data(kolvo=kolvo))

        assert exc_info.value.errors == ['kolvo is required and must be a positive number']

    def test_whole_float_quantity_is_accepted(self):
        data = load_request(AddRecordSchema(), generate_add_data(kolvo=4.0))

        assert data['quantity'] == 4

    def test_quantity_above_column_limit(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(AddRecordSchema(), generate_add_data(kolvo=2147483648))

        assert exc_info.value.errors == ['kolvo must not exceed 2147483647']

    def test_numeric_string_quantity_is_coerced(self):
        data = load_request(AddRecordSchema(), generate_add_data(kolvo='7'))

        assert data['quantity'] == 7

    def test_empty_reason_becomes_none(self):
        data = load_request(AddRecordSchema(), generate_add_data(reason=''))

        assert data['reason'] is None

    def test_unknown_fields_are_ignored(self):
        data = load_request(AddRecordSchema(), generate_add_data(extra='x'))

        assert 'extra' not in data

    def test_non_object_body(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(AddRecordSchema(), None)

        assert len(exc_info.value.errors) == 6


class TestQuantityRanges:
    """Test the per-operation quantity floors."""

    def test_removal_requires_positive(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(RemovalRequestSchema(), {'shk': 'P', 'wr_shk': 'A1', 'condition': 'new', 'kolvo': 0})

        assert exc_info.value.errors == ['kolvo is required and must be a positive number']

    def test_inventory_accepts_zero(self):
        data = load_request(InventoryRequestSchema(), {'shk': 'P', 'wr_shk': 'A1', 'condition': 'new', 'kolvo': 0})

        assert data['quantity'] == 0
        assert data['reason'] is None

    def test_inventory_rejects_negative(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(InventoryRequestSchema(), {'shk': 'P', 'wr_shk': 'A1', 'condition': 'new', 'kolvo': -1})

        assert exc_info.value.errors == ['kolvo is required and must be a non-negative number']


class TestUpdateRecordSchema:
    """Test validation of the update request."""

    def test_invalid_id(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(UpdateRecordSchema(), {'id': 0, 'wr_shk': 'A1', 'kolvo': 1})

        assert exc_info.value.errors == ['id is required and must be a positive number']

    @pytest.mark.parametrize('record_id', [1.5, '2.5', 2147483648])
    def test_id_must_be_a_whole_int(self, record_id):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(UpdateRecordSchema(), {'id': record_id, 'wr_shk': 'A1', 'kolvo': 1})

        assert exc_info.value.errors[0].startswith('id ')

    def test_blank_optional_rejected(self):
        with pytest.raises(RequestValidationError) as exc_info:
            load_request(UpdateRecordSchema(), {'id': 1, 'wr_shk': 'A1', 'kolvo': 1, 'ispolnitel': ''})

        assert exc_info.value.errors == ['ispolnitel must be a non-empty string if provided']

    def test_null_optionals_are_dropped(self):
        data = load_request(UpdateRecordSchema(), {
            'id': '3', 'wr_shk': 'A1', 'kolvo': 0, 'condition': None, 'reason': 'moved'
        })

        assert data == {'id': 3, 'cell_barcode': 'A1', 'quantity': 0, 'reason': 'moved'}


class TestLikeSearchSchema:
    """Test normalisation of fuzzy search terms."""

    def test_blank_terms_are_dropped(self):
        terms = load_request(LikeSearchSchema(), {'wr_name': '  ', 'shk': ' P0 ', 'limit': '5'})

        assert terms == {'product_barcode': 'P0'}

    def test_no_terms(self):
        assert load_request(LikeSearchSchema(), {}) == {}
