"""
Silver Storefront - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, session
from sqlalchemy.engine import make_url

from storefront.config import Config
from storefront.errors import register_error_handlers
from storefront.extensions import db

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    register_error_handlers(app)

    # Register blueprints
    from storefront.auth import auth_bp
    from storefront.admin import admin_bp
    from storefront.shop import shop_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(shop_bp)

    from storefront.cli import register_commands
    register_commands(app)

    @app.context_processor
    def inject_storefront_globals():
        """Inject the signed-in flag and the WhatsApp number into templates."""
        from storefront.services.accounts import SESSION_USER_KEY
        return dict(
            signed_in=session.get(SESSION_USER_KEY) is not None,
            whatsapp_phone=app.config['WHATSAPP_PHONE'],
        )

    # Create database tables
    with app.app_context():
        _ensure_sqlite_directory(app.config['SQLALCHEMY_DATABASE_URI'])
        db.create_all()

    logger.debug('Application created with %s', config_class.__name__)
    return app


def _configure_logging(app):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logging.getLogger('storefront').setLevel(app.config['LOG_LEVEL'])


def _ensure_sqlite_directory(uri):
    url = make_url(uri)
    if not url.drivername.startswith('sqlite'):
        return
    if not url.database or url.database == ':memory:':
        return
    directory = os.path.dirname(os.path.abspath(url.database))
    os.makedirs(directory, exist_ok=True)
