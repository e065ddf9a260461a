"""
Auth Gate

Two stages, always in this order:

1. ``login_required``: the session must carry a user id (401 otherwise).
2. ``admin_required``: that user is re-read from the database on every
   request and must have the admin role (403 otherwise). A failed lookup
   counts as a refusal, never as a pass.
"""

import logging
from functools import wraps

from flask import g, request
from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import Forbidden, Unauthenticated
from storefront.extensions import db
from storefront.services import accounts

logger = logging.getLogger(__name__)


def login_required(f):
    """Reject requests whose session does not identify a user."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if accounts.session_user_id() is None:
            logger.debug('Unauthenticated request to %s', request.path)
            raise Unauthenticated()
        return f(*args, **kwargs)
    return wrapper


def _load_session_user():
    user_id = accounts.session_user_id()
    try:
        return accounts.get_user(user_id)
    except (SQLAlchemyError, TypeError, ValueError):
        db.session.rollback()
        logger.exception('Could not load user %r for the admin check', user_id)
        return None


def admin_required(f):
    """Admit only signed-in admins; the admitted user is available as ``g.user``."""
    @login_required
    @wraps(f)
    def wrapper(*args, **kwargs):
        user = _load_session_user()
        if user is None or not user.is_admin:
            logger.debug('Forbidden request to %s by user %r', request.path, accounts.session_user_id())
            raise Forbidden()
        g.user = user
        return f(*args, **kwargs)
    return wrapper
