"""
Account Service

Registration, credential checks and the session record of who is signed in.
"""

import logging

from flask import current_app, session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from storefront.errors import Conflict, Internal, InvalidCredentials, ValidationError
from storefront.extensions import db
from storefront.models import User, ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)

SESSION_USER_KEY = 'user_id'
HASH_METHOD = 'pbkdf2:sha256'

# Verified against when the email is unknown so both rejections do the same work
_DUMMY_HASH = generate_password_hash('not-a-real-password', method=HASH_METHOD)


def normalize_email(email):
    return (email or '').strip().lower()


def register_user(name, email, password, role=ROLE_USER):
    """Create a user from raw form values.

    Raises ValidationError for missing fields or a short password,
    Conflict when the normalized email is taken, Internal on other
    database failures.
    """
    name = (name or '').strip()
    email = normalize_email(email)
    password = password or ''

    if not name or not email or not password:
        raise ValidationError('Name, email and password are required.')

    min_length = current_app.config['PASSWORD_MIN_LENGTH']
    if len(password) < min_length:
        raise ValidationError(f'Password must be at least {min_length} characters long.')

    user = User(
        name=name,
        email=email,
        password_hash=generate_password_hash(password, method=HASH_METHOD),
        role=role,
    )

    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict('Email already registered.')
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not register user %s', email)
        raise Internal()

    logger.info('Registered user %s (id=%s)', user.email, user.id)
    return user


def authenticate(email, password):
    """Return the user owning these credentials or raise InvalidCredentials."""
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError('Please provide both email and password.')

    try:
        user = User.query.filter_by(email=email).first()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not look up user %s', email)
        raise Internal()

    if user is None:
        check_password_hash(_DUMMY_HASH, password)
        logger.warning('Rejected login for %s', email)
        raise InvalidCredentials()

    if not check_password_hash(user.password_hash, password):
        logger.warning('Rejected login for %s', email)
        raise InvalidCredentials()

    logger.info('User %s signed in', user.id)
    return user


def get_user(user_id):
    """Fresh store lookup; database errors propagate to the caller."""
    return db.session.get(User, int(user_id))


def get_user_by_email(email):
    return User.query.filter_by(email=normalize_email(email)).first()


def promote_to_admin(email):
    """Give an existing user the admin role. Returns None if there is no such user."""
    user = get_user_by_email(email)
    if user is None:
        return None
    user.role = ROLE_ADMIN
    db.session.commit()
    logger.info('Promoted user %s to admin', user.id)
    return user


def create_admin(name, email, password):
    """Create an admin account, or promote the account already using this email."""
    existing = promote_to_admin(email)
    if existing is not None:
        return existing
    return register_user(name, email, password, role=ROLE_ADMIN)


def sign_in(user):
    # Fresh session on every login
    session.clear()
    session[SESSION_USER_KEY] = user.id


def sign_out():
    session.clear()


def session_user_id():
    return session.get(SESSION_USER_KEY)
