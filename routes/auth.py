# routes/auth.py
# Identity comes from the authenticating proxy in the X-Email header.

from functools import wraps

from flask import Blueprint, current_app, g, jsonify, request

auth_bp = Blueprint('auth', __name__)


def current_email():
    email = request.headers.get('X-Email', '').strip()
    if email:
        return email
    # Local development only, see Config.UNSAFE_DEFAULT_EMAIL.
    return current_app.config.get('UNSAFE_DEFAULT_EMAIL')


def display_email(email):
    """Strip the configured suffix, e.g. "jane@example.com" -> "jane"."""
    suffix = current_app.config.get('EMAIL_SUFFIX') or ''
    if suffix and email.endswith(suffix):
        return email[:-len(suffix)]
    return email


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        email = current_email()
        if not email:
            return jsonify(error='Unauthenticated', message='Missing authentication header.'), 401
        g.email = email
        g.is_admin = email == current_app.config['ADMIN_EMAIL']
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not g.is_admin:
            return jsonify(error='PermissionDenied', message='Only the admin can do this.'), 403
        return f(*args, **kwargs)
    return decorated_function


@auth_bp.route('/whoami')
@login_required
def whoami():
    return jsonify(email=g.email, name=display_email(g.email), is_admin=g.is_admin)
