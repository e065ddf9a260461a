"""
Auth Blueprint

Registration, login and logout, both as HTML forms and as a JSON API.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from storefront.auth import routes  # noqa: E402, F401
