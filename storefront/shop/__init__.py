"""
Shop Blueprint

Public storefront page, the product API and uploaded images.
"""

from flask import Blueprint

shop_bp = Blueprint('shop', __name__)

from storefront.shop import routes  # noqa: E402, F401
