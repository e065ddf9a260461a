"""
Catalog Service

Product listing and creation.
"""

import logging
import math
import re

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import Internal, ValidationError
from storefront.extensions import db
from storefront.models import Product
from storefront.services import uploads

logger = logging.getLogger(__name__)

PRICE_PATTERN = re.compile(r'[0-9]+(\.[0-9]+)?')


def list_products(strict=None):
    """All products, newest first.

    A database failure yields an empty list unless strict mode is on
    (argument or STRICT_PRODUCT_LISTING), in which case it raises Internal.
    """
    if strict is None:
        strict = current_app.config['STRICT_PRODUCT_LISTING']
    try:
        return Product.query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not list products')
        if strict:
            raise Internal()
        return []


def parse_price(raw):
    text = raw.strip() if isinstance(raw, str) else ''
    if not text:
        raise ValidationError('Price is required.')
    if not PRICE_PATTERN.fullmatch(text):
        raise ValidationError('Price must be a number.')
    price = float(text)
    if not math.isfinite(price) or price <= 0:
        raise ValidationError('Price must be greater than zero.')
    return price


def create_product(name, raw_price, files):
    """Validate the upload and fields, store the image, then insert the product.

    No row is written and no file is left behind when any step fails.
    """
    image = uploads.accept_image(files)

    name = name.strip() if isinstance(name, str) else ''
    if not name:
        raise ValidationError('Product name is required.')
    price = parse_price(raw_price)

    filename = uploads.save_image(image)
    product = Product(name=name, price=price, image=filename)
    try:
        db.session.add(product)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        uploads.discard_image(filename)
        logger.exception('Could not create product %r', name)
        raise Internal()

    logger.info('Created product %s (%s) with image %s', product.id, product.name, filename)
    return product
