from functools import wraps

from flask import current_app, jsonify, session


def is_logged_in():
    return 'admin_id' in session


def api_login_required(f):
    """Decorator to require an admin session on JSON endpoints"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_app.config.get('ORDERDESK_REQUIRE_LOGIN', True) and not is_logged_in():
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function


def start_admin_session(user):
    session.clear()
    session['admin_id'] = user['id']
    session['admin_username'] = user['username']


def end_admin_session():
    session.pop('admin_id', None)
    session.pop('admin_username', None)
