"""
Upload Service

Accepts the single product image of a request and stores it in the upload
folder under a generated name.
"""

import logging
import os
import re
from uuid import uuid4

from flask import current_app

from storefront.errors import Internal, PayloadTooLarge, UnsupportedMediaType, ValidationError

logger = logging.getLogger(__name__)


def _stream_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def get_upload(files):
    """Pick the one file sent under the upload field."""
    field = current_app.config['UPLOAD_FIELD']
    parts = [f for f in files.getlist(field) if f and f.filename]
    if not parts:
        raise ValidationError('An image file is required.')
    if len(parts) > 1:
        raise ValidationError('Only one image can be uploaded per product.')
    return parts[0]


def validate_image(file):
    """Reject anything that is not an image or is over MAX_IMAGE_BYTES."""
    mimetype = (file.mimetype or '').lower()
    if not mimetype.startswith('image/'):
        logger.debug('Rejected upload %r with type %s', file.filename, mimetype)
        raise UnsupportedMediaType()

    limit = current_app.config['MAX_IMAGE_BYTES']
    if _stream_size(file) > limit:
        logger.debug('Rejected upload %r over %d bytes', file.filename, limit)
        raise PayloadTooLarge(f'Image must be at most {limit // (1024 * 1024)} MiB.')
    return file


def accept_image(files):
    return validate_image(get_upload(files))


_SAFE_EXTENSION = re.compile(r'\.[A-Za-z0-9]+')


def generate_filename(original):
    """Random token plus the original extension; unsafe extensions are dropped."""
    ext = os.path.splitext(os.path.basename(original or ''))[1]
    ext = ext.lower() if _SAFE_EXTENSION.fullmatch(ext) else ''
    return f'{uuid4().hex}{ext}'


def save_image(file):
    """Write an accepted image to the upload folder and return its new filename."""
    folder = current_app.config['UPLOAD_FOLDER']
    filename = generate_filename(file.filename)
    try:
        os.makedirs(folder, exist_ok=True)
        file.save(os.path.join(folder, filename))
    except OSError:
        logger.exception('Could not store upload in %s', folder)
        raise Internal()
    return filename


def discard_image(filename):
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.exception('Could not remove orphaned upload %s', path)
