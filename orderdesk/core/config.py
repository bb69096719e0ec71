import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Base configuration for OrderDesk.
    Every value can be overridden through the environment (or a .env file)
    and again through Flask app.config before OrderDesk(app) is called.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Single admin account
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Hosted backend (PostgREST / Supabase)
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_KEY = os.getenv('SUPABASE_KEY')
    SUPABASE_TIMEOUT = float(os.getenv('SUPABASE_TIMEOUT', '15'))

    # Table names
    ORDERS_TABLE = os.getenv('ORDERS_TABLE', 'orders')
    ORDER_PRODUCTS_TABLE = os.getenv('ORDER_PRODUCTS_TABLE', 'order_products')

    # Listing
    ORDERDESK_DEFAULT_PAGE_SIZE = 50
    ORDERDESK_MAX_PAGE_SIZE = int(os.getenv('ORDERDESK_MAX_PAGE_SIZE', '500'))
    ORDERDESK_REQUIRE_LOGIN = _as_bool(os.getenv('ORDERDESK_REQUIRE_LOGIN'), default=True)
    # Largest value of the order_id column, int4 by default (2**63 - 1 for bigint)
    ORDERDESK_MAX_ORDER_ID = int(os.getenv('ORDERDESK_MAX_ORDER_ID', str(2**31 - 1)))

    # Persistent application log
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, 'app_logs.db'))

    # Comma separated list of origins allowed to call /api/*
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '')

    BRAND_NAME = os.getenv('BRAND_NAME', 'Orders Dashboard')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Port for local server
    PORT = int(os.getenv('PORT', '5000'))


REQUIRED_SETTINGS = {
    'ADMIN_USERNAME': 'admin username',
    'ADMIN_PASSWORD': 'admin password',
    'SUPABASE_URL': 'backend URL',
    'SUPABASE_KEY': 'backend API key',
}


def validate_config(config):
    """
    Check a config mapping for missing required settings.

    Returns a list of human readable problems; an empty list means the
    configuration is complete.
    """
    problems = []
    for key, label in REQUIRED_SETTINGS.items():
        value = config.get(key)
        if value is None or not str(value).strip():
            problems.append(f'{key} ({label}) is not set')

    max_page = config.get('ORDERDESK_MAX_PAGE_SIZE')
    if not isinstance(max_page, int) or max_page < 1:
        problems.append('ORDERDESK_MAX_PAGE_SIZE must be a positive integer')

    max_id = config.get('ORDERDESK_MAX_ORDER_ID')
    if not isinstance(max_id, int) or max_id < 1:
        problems.append('ORDERDESK_MAX_ORDER_ID must be a positive integer')

    return problems
