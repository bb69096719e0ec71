"""
OrderDesk application wiring.

    from flask import Flask
    from orderdesk import OrderDesk

    app = Flask(__name__)
    OrderDesk(app)

or simply `app = create_app()`.
"""

import logging

from flask import Flask, current_app
from flask_cors import CORS

from .core.config import Config, validate_config
from .core.exceptions import ConfigurationError
from .core.logging_service import LoggingService
from .core.supabase import SupabaseClient

logger = logging.getLogger(__name__)


class OrderDesk:
    """
    Flask extension holding the validated configuration, the admin
    credentials and the order store, and registering every blueprint.
    """

    def __init__(self, app=None, supabase_client=None):
        self.app = None
        self.credentials = None
        self.client = None
        self.store = None
        self.problems = []
        self._supabase_client = supabase_client
        self._registered = []

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        # App config wins over Config defaults
        for key in dir(Config):
            if key.isupper() and key not in app.config:
                app.config[key] = getattr(Config, key)
        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        self.app = app
        self.problems = validate_config(app.config)
        for problem in self.problems:
            logger.error("Configuration problem: %s", problem)

        from .modules.auth import AdminCredentials
        self.credentials = AdminCredentials.from_config(app.config)

        client = self._supabase_client
        if client is None and app.config.get('SUPABASE_URL') and app.config.get('SUPABASE_KEY'):
            client = SupabaseClient(
                app.config['SUPABASE_URL'],
                app.config['SUPABASE_KEY'],
                timeout=app.config.get('SUPABASE_TIMEOUT', 15),
            )
        self.client = client

        if client is not None:
            from .modules.orders import OrderStore
            self.store = OrderStore(
                client,
                orders_table=app.config['ORDERS_TABLE'],
                products_table=app.config['ORDER_PRODUCTS_TABLE'],
                max_page_size=app.config['ORDERDESK_MAX_PAGE_SIZE'],
                max_order_id=app.config['ORDERDESK_MAX_ORDER_ID'],
            )

        origins = [o.strip() for o in (app.config.get('CORS_ORIGINS') or '').split(',') if o.strip()]
        if origins:
            CORS(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

        self._register_blueprints(app)

        @app.context_processor
        def inject_orderdesk():
            return {'brand_name': app.config.get('BRAND_NAME', 'Orders Dashboard')}

        app.extensions['orderdesk'] = self

        with app.app_context():
            if self.problems:
                LoggingService.warning('system', 'OrderDesk started with configuration problems',
                                       {'problems': self.problems})
            else:
                LoggingService.info('system', 'OrderDesk started')

    def _register_blueprints(self, app):
        from .modules.auth import auth_bp
        from .modules.orders import orders_bp
        from .modules.dashboard import dashboard_bp
        from .modules.ops import ops_health_bp

        for name, bp in (('auth', auth_bp), ('orders', orders_bp),
                         ('dashboard', dashboard_bp), ('ops', ops_health_bp)):
            app.register_blueprint(bp)
            self._registered.append(name)

    def get_registered_modules(self):
        return list(self._registered)

    def get_store(self):
        """The order store, or ConfigurationError when the backend is not configured"""
        if self.store is None:
            missing = [key for key in ('SUPABASE_URL', 'SUPABASE_KEY') if not self.app.config.get(key)]
            raise ConfigurationError(missing or ['SUPABASE_URL'])
        return self.store


def get_orderdesk():
    return current_app.extensions['orderdesk']


def create_app(config=None, supabase_client=None):
    """Build a Flask app with OrderDesk registered. `config` overrides Config values."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'))
    app.config['SESSION_COOKIE_SECURE'] = not (app.debug or app.testing)

    OrderDesk(app, supabase_client=supabase_client)
    return app
