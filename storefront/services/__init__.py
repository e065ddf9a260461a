"""
Services Package

Store reads and writes used by the blueprints and the CLI.
"""

from storefront.services import accounts, catalog, uploads

__all__ = ['accounts', 'catalog', 'uploads']
