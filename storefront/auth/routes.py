"""
Auth Routes
"""

from flask import flash, jsonify, redirect, render_template, request, url_for

from storefront.auth import auth_bp
from storefront.errors import Conflict, InvalidCredentials, ValidationError
from storefront.services import accounts


def _payload():
    """Request fields from a JSON body or a submitted form."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form


def _field(data, key):
    value = data.get(key)
    return value if isinstance(value, str) else None


# -----------------------------------------------------------------------------
# JSON API
# -----------------------------------------------------------------------------

@auth_bp.route('/api/users', methods=['POST'])
def api_register():
    data = _payload()
    user = accounts.register_user(_field(data, 'name'), _field(data, 'email'), _field(data, 'password'))
    return jsonify(user.to_dict()), 201


@auth_bp.route('/api/auth/login', methods=['POST'])
def api_login():
    data = _payload()
    user = accounts.authenticate(_field(data, 'email'), _field(data, 'password'))
    accounts.sign_in(user)
    return jsonify(user.to_dict())


@auth_bp.route('/api/auth/logout', methods=['POST'])
def api_logout():
    accounts.sign_out()
    return '', 204


# -----------------------------------------------------------------------------
# HTML forms
# -----------------------------------------------------------------------------

@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration page"""
    if request.method == 'POST':
        try:
            accounts.register_user(
                request.form.get('name'),
                request.form.get('email'),
                request.form.get('password'),
            )
        except (ValidationError, Conflict) as e:
            return render_template('register.html', error=e.description), e.code

        flash('Registration successful! Please login.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('register.html')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login page"""
    if request.method == 'POST':
        try:
            user = accounts.authenticate(request.form.get('email'), request.form.get('password'))
        except (ValidationError, InvalidCredentials) as e:
            return render_template('login.html', error=e.description), e.code

        accounts.sign_in(user)
        if user.is_admin:
            return redirect(url_for('admin.dashboard'))
        return redirect(url_for('shop.index'))

    return render_template('login.html')


@auth_bp.route('/logout')
def logout():
    accounts.sign_out()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('auth.login'))
