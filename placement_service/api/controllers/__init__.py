"""
Controllers package initialization
"""

# Import all blueprints for registration
from placement_service.api.controllers.inventory import create_inventory_blueprint, inventory_ns
from placement_service.api.controllers.operational import register_operational_routes

__all__ = ['create_inventory_blueprint', 'inventory_ns', 'register_operational_routes']
