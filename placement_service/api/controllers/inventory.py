"""
Inventory Controller - Placement, removal, inventory correction and queries
"""

from functools import wraps
from flask import Blueprint, current_app, request
from flask_restx import Api, Namespace, Resource, fields
from werkzeug.exceptions import HTTPException
from placement_service.services import InventoryService
from placement_service.utils.exceptions import InventoryError
from placement_service.utils.responses import error_response, internal_error_response, success_response
import logging

logger = logging.getLogger(__name__)

# Create namespace mounted at the blueprint root
inventory_ns = Namespace('inventory', path='/', description='Cell placement operations')


def create_inventory_blueprint():
    """Build a fresh blueprint carrying the documented API, one per application"""
    inventory_bp = Blueprint('inventory', __name__)
    api = Api(inventory_bp, version='1.0', title='X_Three_PL Service API',
              description='Warehouse cell placement endpoints', doc='/docs/')
    api.add_namespace(inventory_ns)
    return inventory_bp


def get_inventory_models(api):
    """Define API models for request bodies"""
    add_record_model = api.model('AddRecord', {
        'shk': fields.String(required=True, description='Product barcode'),
        'name': fields.String(required=True, description='Product name'),
        'wr_shk': fields.String(required=True, description='Warehouse cell barcode'),
        'kolvo': fields.Integer(required=True, min=1, description='Quantity placed'),
        'condition': fields.String(required=True, description='Item condition'),
        'reason': fields.String(description='Optional note'),
        'ispolnitel': fields.String(required=True, description='Who performed the operation')
    })

    minimal_record_model = api.model('AddMinimalRecord', {
        'shk': fields.String(required=True, description='Product barcode'),
        'name': fields.String(required=True, description='Product name')
    })

    removal_model = api.model('RemoveItems', {
        'shk': fields.String(required=True, description='Product barcode'),
        'wr_shk': fields.String(required=True, description='Warehouse cell barcode'),
        'condition': fields.String(required=True, description='Item condition'),
        'kolvo': fields.Integer(required=True, min=1, description='Quantity to remove')
    })

    inventory_model = api.model('PerformInventory', {
        'shk': fields.String(required=True, description='Product barcode'),
        'wr_shk': fields.String(required=True, description='Warehouse cell barcode'),
        'condition': fields.String(required=True, description='Item condition'),
        'kolvo': fields.Integer(required=True, min=0, description='Counted quantity, 0 deletes the record'),
        'reason': fields.String(description='Reason for the correction')
    })

    update_model = api.model('UpdateRecord', {
        'id': fields.Integer(required=True, min=1, description='Record ID'),
        'wr_shk': fields.String(required=True, description='Warehouse cell barcode'),
        'kolvo': fields.Integer(required=True, min=0, description='New quantity'),
        'ispolnitel': fields.String(description='Who performed the operation'),
        'condition': fields.String(description='Item condition'),
        'reason': fields.String(description='Optional note')
    })

    return add_record_model, minimal_record_model, removal_model, inventory_model, update_model


# Define models
(add_record_model, minimal_record_model, removal_model,
 inventory_model, update_model) = get_inventory_models(inventory_ns)


@inventory_ns.errorhandler(HTTPException)
def handle_http_exception(error):
    """Keep the envelope for 404/405 raised on documented routes"""
    return error_response(error.description, error.code)


def get_inventory_service():
    """Build a service bound to the app's configured cell resolver"""
    return InventoryService(cell_resolver=current_app.extensions['cell_resolver'])


def envelope(operation):
    """Wrap a handler result in the response envelope and map failures to 400/500"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return success_response(func(*args, **kwargs))
            except InventoryError as e:
                logger.info(f"{operation} rejected: {e.message}")
                return error_response(e.message, e.status_code)
            except Exception as e:
                logger.exception(f"Unexpected error in {operation}: {e}")
                return internal_error_response()
        return wrapper
    return decorator


@inventory_ns.route('/add')
class AddRecord(Resource):
    @inventory_ns.doc('add_record')
    @inventory_ns.expect(add_record_model)
    @envelope('addRecord')
    def post(self):
        """Place a product into a warehouse cell"""
        logger.debug(f"Received POST /add request: {request.get_json(silent=True)}")
        get_inventory_service().add_record(request.get_json(silent=True))
        return {}


@inventory_ns.route('/add-minimal')
class AddMinimalRecord(Resource):
    @inventory_ns.doc('add_minimal_record')
    @inventory_ns.expect(minimal_record_model)
    @envelope('addMinimalRecord')
    def post(self):
        """Register a product that is not placed in a cell yet"""
        return get_inventory_service().add_minimal_record(request.get_json(silent=True))


@inventory_ns.route('/update')
class UpdateRecord(Resource):
    @inventory_ns.doc('update_record')
    @inventory_ns.expect(update_model)
    @envelope('updateRecord')
    def put(self):
        """Assign a record to a cell and set its quantity"""
        return get_inventory_service().update_record(request.get_json(silent=True))


@inventory_ns.route('/razmeshennye')
class PlacedItems(Resource):
    @inventory_ns.doc('get_razmeshennye')
    @envelope('getRazmeshennye')
    def get(self):
        """List placed items"""
        return {'items': get_inventory_service().get_placed()}


@inventory_ns.route('/nerazmeshennye')
class UnplacedItems(Resource):
    @inventory_ns.doc('get_nerazmeshennye')
    @envelope('getNerazmeshennye')
    def get(self):
        """List items waiting to be placed"""
        return {'items': get_inventory_service().get_unplaced()}


@inventory_ns.route('/snyatie')
class RemoveItems(Resource):
    @inventory_ns.doc('remove_items')
    @inventory_ns.expect(removal_model)
    @envelope('removeItems')
    def post(self):
        """Remove a quantity of a product from a cell"""
        get_inventory_service().remove_items(request.get_json(silent=True))
        return {}


@inventory_ns.route('/search')
class SearchByCell(Resource):
    @inventory_ns.doc('search_by_wr_shk', params={'wr_shk': 'Warehouse cell barcode'})
    @envelope('searchByWrShk')
    def get(self):
        """Find records stored in one cell"""
        return {'items': get_inventory_service().search_by_cell(request.args.to_dict())}


@inventory_ns.route('/search-like')
class SearchLike(Resource):
    @inventory_ns.doc('search_with_like', params={
        'wr_name': 'Cell name fragment',
        'wr_shk': 'Cell barcode fragment',
        'shk': 'Product barcode fragment',
        'name': 'Product name fragment'
    })
    @envelope('searchWithLike')
    def get(self):
        """Substring search across cell and product fields"""
        return {'items': get_inventory_service().search_like(request.args.to_dict())}


@inventory_ns.route('/inventory')
class PerformInventory(Resource):
    @inventory_ns.doc('perform_inventory')
    @inventory_ns.expect(inventory_model)
    @envelope('performInventory')
    def post(self):
        """Correct the counted quantity of a record"""
        get_inventory_service().perform_inventory(request.get_json(silent=True))
        return {}


@inventory_ns.route('/all')
class AllRecords(Resource):
    @inventory_ns.doc('get_all_records', params={
        'limit': 'Page size (default 1000, max 10000)',
        'offset': 'Records to skip (default 0)'
    })
    @envelope('getAllRecords')
    def get(self):
        """List every record with all fields"""
        return get_inventory_service().get_all_records(
            limit=request.args.get('limit', type=int),
            offset=request.args.get('offset', type=int),
            default_limit=current_app.config.get('DEFAULT_PAGE_LIMIT', 1000),
            max_limit=current_app.config.get('MAX_PAGE_LIMIT', 10000)
        )
