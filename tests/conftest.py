import io

import pytest
from werkzeug.security import generate_password_hash

from storefront import create_app
from storefront.config import TestConfig
from storefront.extensions import db
from storefront.models import User, ROLE_ADMIN, ROLE_USER

PNG_HEADER = b'\x89PNG\r\n\x1a\n'


@pytest.fixture()
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def upload_dir(app):
    return app.config['UPLOAD_FOLDER']


@pytest.fixture()
def make_user(app):
    def _make(email='user@example.com', password='secret1', role=ROLE_USER, name='User'):
        with app.app_context():
            user = User(name=name, email=email, password_hash=generate_password_hash(password), role=role)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture()
def login(client):
    def _login(email, password):
        return client.post('/api/auth/login', json={'email': email, 'password': password})
    return _login


@pytest.fixture()
def admin_client(client, make_user, login):
    make_user(email='admin@example.com', password='admin123', role=ROLE_ADMIN, name='Admin')
    r = login('admin@example.com', 'admin123')
    assert r.status_code == 200
    return client


@pytest.fixture()
def user_client(client, make_user, login):
    make_user(email='user@example.com', password='secret1')
    r = login('user@example.com', 'secret1')
    assert r.status_code == 200
    return client


@pytest.fixture()
def image():
    """Build a multipart file tuple of the given size and type."""
    def _image(size=1024, filename='ring.png', content_type='image/png'):
        body = PNG_HEADER + b'\0' * max(size - len(PNG_HEADER), 0)
        return (io.BytesIO(body), filename, content_type)
    return _image


@pytest.fixture()
def product_count(app):
    def _count():
        from storefront.models import Product
        with app.app_context():
            return Product.query.count()
    return _count
