"""
Shop Routes
"""

from flask import current_app, jsonify, render_template, request, send_from_directory

from storefront.admin.decorators import admin_required
from storefront.services import catalog
from storefront.shop import shop_bp


@shop_bp.route('/')
def index():
    return render_template('index.html')


@shop_bp.route('/api/products', methods=['GET'])
def list_products():
    """Public catalog, newest first"""
    return jsonify([p.to_dict() for p in catalog.list_products()])


@shop_bp.route('/api/products', methods=['POST'])
@admin_required
def create_product():
    product = catalog.create_product(
        request.form.get('name'),
        request.form.get('price'),
        request.files,
    )
    return jsonify(product.to_dict()), 201


@shop_bp.route('/uploads/<path:filename>')
def uploaded_image(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
