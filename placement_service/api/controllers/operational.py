"""
Operational endpoints for the placement service
Mounted at the application root, outside the API prefix and the response envelope
"""

from flask import current_app
from flask_restx import Resource
from datetime import datetime


class Health(Resource):
    def get(self):
        """Liveness probe used by load balancers"""
        return {
            'status': 'OK',
            'timestamp': datetime.utcnow().isoformat() + 'Z'
        }, 200


class ServiceInfo(Resource):
    def get(self):
        """Service banner pointing at the interactive documentation"""
        prefix = current_app.config.get('API_PREFIX', '/x3pl').rstrip('/')
        return {
            'message': 'X_Three_PL Service API',
            'version': current_app.config.get('API_VERSION', '1.0.0'),
            'documentation': f"{prefix}/docs/"
        }, 200


def register_operational_routes(app):
    """Attach the operational resources to the app root"""
    app.add_url_rule('/health', 'health', Health().get, methods=['GET'])
    app.add_url_rule('/', 'service_info', ServiceInfo().get, methods=['GET'])
