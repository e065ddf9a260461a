"""
Error taxonomy

Every error is a Werkzeug HTTP exception, so a view can simply raise it and
Flask turns it into a response with the right status code. API paths get a
JSON body through the handler registered in ``register_error_handlers``.
"""

import logging

from flask import jsonify, request
from werkzeug import exceptions

logger = logging.getLogger(__name__)


class ValidationError(exceptions.BadRequest):
    description = 'Invalid input.'


class Conflict(exceptions.Conflict):
    description = 'Resource already exists.'


class InvalidCredentials(exceptions.Unauthorized):
    description = 'Invalid email or password.'


class Unauthenticated(exceptions.Unauthorized):
    description = 'Authentication required.'


class Forbidden(exceptions.Forbidden):
    description = 'Admin access required.'


class UnsupportedMediaType(exceptions.UnsupportedMediaType):
    description = 'Only image uploads are accepted.'


class PayloadTooLarge(exceptions.RequestEntityTooLarge):
    description = 'Image exceeds the maximum upload size.'


class Internal(exceptions.InternalServerError):
    description = 'Internal server error.'


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Render HTTP errors as JSON on the API and log unexpected failures."""

    @app.errorhandler(exceptions.HTTPException)
    def handle_http_error(error):
        if not _wants_json():
            return error
        headers = [h for h in error.get_headers() if h[0].lower() != 'content-type']
        return jsonify(error=error.description), error.code, headers

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        if _wants_json():
            return jsonify(error=Internal.description), 500
        return Internal()
