"""
Admin Routes
"""

from flask import flash, g, redirect, render_template, request, url_for
from werkzeug.exceptions import RequestEntityTooLarge

from storefront.admin import admin_bp
from storefront.admin.decorators import admin_required
from storefront.errors import Unauthenticated, UnsupportedMediaType, ValidationError
from storefront.services import catalog


@admin_bp.errorhandler(Unauthenticated)
def redirect_to_login(error):
    flash('Please log in to access the admin area.', 'info')
    return redirect(url_for('auth.login'))


@admin_bp.route('/admin')
@admin_required
def dashboard():
    """Product form plus the current catalog."""
    products = catalog.list_products()
    return render_template('admin.html', products=products, user=g.user)


@admin_bp.route('/admin/products', methods=['POST'])
@admin_required
def create_product():
    """Form submission from the admin page."""
    try:
        product = catalog.create_product(
            request.form.get('name'),
            request.form.get('price'),
            request.files,
        )
    except (ValidationError, UnsupportedMediaType, RequestEntityTooLarge) as e:
        flash(e.description, 'danger')
        return redirect(url_for('admin.dashboard'))

    flash(f'Product "{product.name}" added successfully.', 'success')
    return redirect(url_for('admin.dashboard'))
