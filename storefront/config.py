"""
Configuration settings for the Silver Storefront
"""
import os


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'storefront.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'public', 'uploads')
    UPLOAD_FIELD = 'image'
    MAX_IMAGE_BYTES = 2 * 1024 * 1024
    # Outer bound on the whole request body; werkzeug answers 413 above it
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024

    # Accounts
    PASSWORD_MIN_LENGTH = 6

    # Storefront page
    WHATSAPP_PHONE = os.environ.get('WHATSAPP_PHONE') or '5516994117188'

    # Listing surfaces store errors as 500 instead of an empty list
    STRICT_PRODUCT_LISTING = _env_flag('STRICT_PRODUCT_LISTING')

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    STRICT_PRODUCT_LISTING = False
    LOG_LEVEL = 'DEBUG'
