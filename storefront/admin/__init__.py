"""
Admin Blueprint

The admin page and the form that creates products. Every route here
sits behind the two-stage gate in ``storefront.admin.decorators``.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from storefront.admin import routes  # noqa: E402, F401
