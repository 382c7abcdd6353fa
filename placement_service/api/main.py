#!/usr/bin/env python3
"""
X_Three_PL Service API
Flask-based REST API for tracking products in warehouse cells.
"""

import os
import logging
from flask import Flask
from flask_cors import CORS

logger = logging.getLogger(__name__)


def create_app(config_name='default'):
    """Application factory pattern for API"""
    # Load environment variables before the config values are read
    from dotenv import load_dotenv
    load_dotenv()

    app = Flask(__name__)

    # Load configuration
    from config import config, get_database_uri
    app.config.from_object(config[config_name])
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = get_database_uri()

    # Configure logging
    from placement_service.api.middlewares import CorrelationIdMiddleware, init_correlation_id_logging
    if not app.testing:
        init_correlation_id_logging(app.config['LOG_LEVEL'])

    # Initialize correlation ID middleware
    CorrelationIdMiddleware(app)

    # Initialize database
    from placement_service.shared.database import init_db
    init_db(app)

    # CORS setup
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))

    # Cell name lookup used by add and update
    from placement_service.clients import init_cell_resolver
    resolver = init_cell_resolver(app)
    app.logger.info(f"Cell resolver: {type(resolver).__name__}")

    # Register blueprints/controllers
    from placement_service.api.controllers import create_inventory_blueprint, register_operational_routes
    app.register_blueprint(create_inventory_blueprint(), url_prefix=app.config['API_PREFIX'])

    # Register operational endpoints
    register_operational_routes(app)

    # Register error handlers
    from placement_service.utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    return app


def init_database(app):
    """
    Verify the connection and create the placement table if it is missing

    x_Storage_Scklads belongs to the warehouse directory and is never created here.
    """
    from placement_service.shared.database import db
    from placement_service.models import InventoryRecord
    with app.app_context():
        try:
            from sqlalchemy import text
            db.session.execute(text('SELECT 1'))
            InventoryRecord.__table__.create(bind=db.engine, checkfirst=True)
            app.logger.info("Database tables created successfully")
            return True
        except Exception as e:
            app.logger.error(f"Failed to create database tables: {e}")
            if app.config.get('ENV_NAME') == 'production':
                raise
            app.logger.warning("Continuing without database connection in development mode")
            return False


def main():
    """Main application entry point for API"""
    env = os.environ.get('FLASK_ENV', 'production')

    # Create Flask application
    app = create_app(env)

    # Initialize database
    init_database(app)

    # Get host and port from environment
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', 3010))
    debug = env == 'development'

    logger.info(f"Starting X_Three_PL Service on {host}:{port} (env: {env})")

    # Run the application
    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=True
    )


if __name__ == '__main__':
    main()
