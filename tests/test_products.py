import os
import re

from storefront.extensions import db
from storefront.models import Product

GENERATED_NAME = re.compile(r'^[0-9a-f]{32}\.png$')
MIB = 1024 * 1024


def test_listing_starts_empty(client):
    r = client.get('/api/products')
    assert r.status_code == 200
    assert r.get_json() == []


def test_create_product_with_one_mib_png(app, admin_client, image, upload_dir, product_count):
    r = admin_client.post('/api/products', data={'name': '  Anel de prata ', 'price': '89.90',
                                                  'image': image(size=MIB)})
    assert r.status_code == 201
    data = r.get_json()
    assert data['name'] == 'Anel de prata'
    assert data['price'] == 89.9
    assert GENERATED_NAME.match(data['image'])

    assert product_count() == 1
    path = os.path.join(upload_dir, data['image'])
    assert os.path.isfile(path)
    assert os.path.getsize(path) == MIB

    with app.app_context():
        product = db.session.get(Product, data['id'])
        assert product.image == data['image']
        assert isinstance(product.price, float)


def test_listing_is_newest_first(admin_client, image):
    first = admin_client.post('/api/products', data={'name': 'P1', 'price': '10', 'image': image()})
    second = admin_client.post('/api/products', data={'name': 'P2', 'price': '20', 'image': image()})
    assert first.status_code == second.status_code == 201

    r = admin_client.get('/api/products')
    names = [p['name'] for p in r.get_json()]
    assert names == ['P2', 'P1']
    assert set(r.get_json()[0]) == {'id', 'name', 'price', 'image'}


def test_listing_is_public(admin_client, client, image):
    admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image()})
    admin_client.post('/api/auth/logout')
    r = client.get('/api/products')
    assert r.status_code == 200
    assert len(r.get_json()) == 1


def test_invalid_prices_are_rejected(admin_client, image, upload_dir, product_count):
    for price in ('0', '-5', 'abc', '', 'nan', 'inf'):
        r = admin_client.post('/api/products', data={'name': 'Ring', 'price': price, 'image': image()})
        assert r.status_code == 400, price

    r = admin_client.post('/api/products', data={'name': 'Ring', 'image': image()})
    assert r.status_code == 400

    assert product_count() == 0
    assert not os.path.isdir(upload_dir) or os.listdir(upload_dir) == []


def test_blank_name_is_rejected(admin_client, image, product_count):
    r = admin_client.post('/api/products', data={'name': '   ', 'price': '10', 'image': image()})
    assert r.status_code == 400
    r = admin_client.post('/api/products', data={'price': '10', 'image': image()})
    assert r.status_code == 400
    assert product_count() == 0


def test_missing_image_is_rejected(admin_client, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10'})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'An image file is required.'
    assert product_count() == 0


def test_two_images_are_rejected(admin_client, image, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10',
                                                  'image': [image(filename='a.png'), image(filename='b.png')]})
    assert r.status_code == 400
    assert product_count() == 0


def test_text_upload_is_unsupported(admin_client, image, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10',
                                                  'image': image(filename='notes.txt', content_type='text/plain')})
    assert r.status_code == 415
    assert product_count() == 0


def test_three_mib_image_is_too_large(admin_client, image, upload_dir, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image(size=3 * MIB)})
    assert r.status_code == 413
    assert product_count() == 0
    assert not os.path.isdir(upload_dir) or os.listdir(upload_dir) == []


def test_request_over_content_limit_is_too_large(admin_client, image, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image(size=5 * MIB)})
    assert r.status_code == 413
    assert product_count() == 0


def test_image_at_exact_limit_is_accepted(admin_client, image):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image(size=2 * MIB)})
    assert r.status_code == 201


def test_uploaded_image_is_served(admin_client, client, image):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image(size=2048)})
    filename = r.get_json()['image']

    r = client.get(f'/uploads/{filename}')
    assert r.status_code == 200
    assert r.data.startswith(b'\x89PNG')
    assert len(r.data) == 2048


def test_missing_upload_is_404(client):
    assert client.get('/uploads/nothing.png').status_code == 404


def test_listing_store_error_returns_empty_list(app, admin_client, image, caplog):
    admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image()})
    with app.app_context():
        Product.__table__.drop(db.engine)

    r = admin_client.get('/api/products')
    assert r.status_code == 200
    assert r.get_json() == []
    assert 'Could not list products' in caplog.text


def test_listing_store_error_in_strict_mode(app, client):
    app.config['STRICT_PRODUCT_LISTING'] = True
    with app.app_context():
        Product.__table__.drop(db.engine)

    r = client.get('/api/products')
    assert r.status_code == 500
    assert r.get_json() == {'error': 'Internal server error.'}


def test_failed_insert_removes_saved_image(app, admin_client, image, upload_dir, monkeypatch):
    from sqlalchemy.exc import OperationalError

    def broken_commit():
        raise OperationalError('INSERT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10', 'image': image()})
    monkeypatch.undo()

    assert r.status_code == 500
    assert 'disk' not in r.get_json()['error']
    assert os.listdir(upload_dir) == []


def test_non_ascii_image_name_keeps_extension(admin_client, client, image):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '10',
                                                  'image': image(filename='戒指.png')})
    assert r.status_code == 201
    filename = r.get_json()['image']
    assert GENERATED_NAME.match(filename)

    r = client.get(f'/uploads/{filename}')
    assert r.status_code == 200
    assert r.mimetype == 'image/png'


def test_price_with_underscore_is_rejected(admin_client, image, product_count):
    r = admin_client.post('/api/products', data={'name': 'Ring', 'price': '1_000', 'image': image()})
    assert r.status_code == 400
    assert product_count() == 0
