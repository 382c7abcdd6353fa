import os


def get_database_uri():
    """
    Build the database URI from the environment
    DATABASE_URL wins when set, otherwise the DB_* variables are assembled
    """
    database_url = os.environ.get('DATABASE_URL')
    if database_url:
        return database_url

    user = os.environ.get('DB_USER', 'admin')
    password = os.environ.get('DB_PASSWORD', 'admin123')
    host = os.environ.get('DB_HOST', 'localhost')
    port = os.environ.get('DB_PORT', '3306')
    database = os.environ.get('DB_NAME', 'placement_service_db')
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{database}"


class Config:
    """Base configuration"""

    # Flask
    ENV_NAME = 'default'
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database - resolved at app creation so .env values are honoured
    SQLALCHEMY_DATABASE_URI = None
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # API
    API_PREFIX = os.environ.get('API_PREFIX', '/x3pl')
    API_VERSION = os.environ.get('API_VERSION', '1.0.0')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
    # flask-restx appends a "message" key to error payloads unless disabled
    ERROR_INCLUDE_MESSAGE = False

    # Cell name lookup: 'database' reads x_Storage_Scklads, 'http' calls the cell service
    CELL_RESOLVER = os.environ.get('CELL_RESOLVER', 'database')
    CELL_SERVICE_URL = os.environ.get('CELL_SERVICE_URL', 'http://localhost:3020')
    CELL_SERVICE_TIMEOUT = float(os.environ.get('CELL_SERVICE_TIMEOUT', 5))

    # Pagination for the full listing
    DEFAULT_PAGE_LIMIT = int(os.environ.get('DEFAULT_PAGE_LIMIT', 1000))
    MAX_PAGE_LIMIT = int(os.environ.get('MAX_PAGE_LIMIT', 10000))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    TESTING = True
    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    API_PREFIX = '/x3pl'
    CELL_RESOLVER = 'static'


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
