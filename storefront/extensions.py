"""
Flask Extensions

Extension objects are created unbound and attached to an application
by the factory in ``storefront.create_app``.
"""

from flask_sqlalchemy import SQLAlchemy

# Database instance
db = SQLAlchemy()
