"""
Models Package

Exports all models for easy importing.
"""

from storefront.models.user import User, ROLE_ADMIN, ROLE_USER
from storefront.models.product import Product

__all__ = ['User', 'Product', 'ROLE_ADMIN', 'ROLE_USER']
