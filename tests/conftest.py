import os
import pytest
from datetime import datetime, timedelta

# Set test environment variables before importing the app
os.environ['FLASK_ENV'] = 'testing'

from placement_service.api.main import create_app
from placement_service.clients import StaticCellResolver
from placement_service.models import db, InventoryRecord, StorageCell


@pytest.fixture(scope='session')
def app():
    """Create application for the tests."""
    app = create_app('testing')

    with app.app_context():
        # Create all database tables, the reference table included
        db.create_all()
        yield app
        # Clean up
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Create a database session for a test."""
    with app.app_context():
        db.create_all()

        yield db.session

        # Clean up tables
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture
def cell_resolver(app):
    """Known cells for add and update requests."""
    resolver = StaticCellResolver({
        'A1': 'Cell A1',
        'B2': 'Cell B2',
    })
    app.extensions['cell_resolver'] = resolver
    yield resolver
    app.extensions['cell_resolver'] = StaticCellResolver()


@pytest.fixture
def placed_record(db_session):
    """A product sitting in cell A1."""
    return create_test_record(db_session)


@pytest.fixture
def unplaced_record(db_session):
    """A product registered but not shelved yet."""
    return create_unplaced_record(db_session)


# Helper functions for tests
def create_test_record(db_session, **kwargs):
    """Create a placed inventory record with default values."""
    defaults = {
        'product_barcode': 'P001',
        'product_name': 'Test Product',
        'cell_barcode': 'A1',
        'cell_name': 'Cell A1',
        'quantity': 10,
        'condition': 'new',
        'reason': None,
        'executor': 'tester',
        'created_at': datetime.utcnow(),
        'updated_at': None
    }
    defaults.update(kwargs)

    record = InventoryRecord(**defaults)
    db_session.add(record)
    db_session.commit()
    return record


def create_unplaced_record(db_session, **kwargs):
    """Create a record the way minimal add does."""
    defaults = {
        'product_barcode': 'U001',
        'product_name': 'Unplaced Product',
        'cell_barcode': '',
        'cell_name': '',
        'quantity': 0,
        'condition': None,
        'executor': None
    }
    defaults.update(kwargs)
    return create_test_record(db_session, **defaults)


def create_storage_cell(db_session, barcode='A1', name='Cell A1'):
    """Create a reference row in x_Storage_Scklads."""
    cell = StorageCell(barcode=barcode, name=name)
    db_session.add(cell)
    db_session.commit()
    return cell


def create_aged_records(db_session, count, **kwargs):
    """Create `count` records one minute apart, oldest first."""
    start = datetime.utcnow() - timedelta(minutes=count)
    return [
        create_test_record(db_session, created_at=start + timedelta(minutes=i), **kwargs)
        for i in range(count)
    ]


# Test data generators
def generate_add_data(**kwargs):
    """Generate a full add request body."""
    defaults = {
        'shk': 'P001',
        'name': 'Test Product',
        'wr_shk': 'A1',
        'kolvo': 10,
        'condition': 'new',
        'ispolnitel': 'tester'
    }
    defaults.update(kwargs)
    return defaults


# Custom assertions
def assert_envelope_error(response, status_code, message):
    """Assert the error envelope shape and message."""
    assert response.status_code == status_code
    json_data = response.get_json()
    assert json_data == {
        'success': False,
        'errorCode': status_code,
        'value': {'error': message}
    }
