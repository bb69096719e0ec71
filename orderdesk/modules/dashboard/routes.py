"""
Admin Dashboard Routes
======================

Login form and the orders dashboard page.
"""

from functools import wraps

from flask import render_template, request, redirect, url_for, flash, session

from orderdesk.core.exceptions import ConfigurationError
from orderdesk.core.logging_service import LoggingService
from orderdesk.modules.auth.credentials import check_credentials
from orderdesk.modules.auth.utils import start_admin_session, end_admin_session, is_logged_in
from orderdesk.modules.orders.status import CANONICAL_STATUSES
from . import dashboard_bp


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_logged_in():
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def _safe_next(target):
    """Only follow relative redirects back into the app"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login page"""
    if request.method == 'POST':
        from orderdesk import get_orderdesk

        username = request.form.get('username', '')
        password = request.form.get('password', '')

        if not username.strip() or not password:
            flash('Please enter both username and password', 'error')
            return render_template('dashboard/login.html'), 400

        try:
            user = check_credentials(username, password, get_orderdesk().credentials)
        except ConfigurationError:
            flash('Server configuration error', 'error')
            return render_template('dashboard/login.html'), 500

        if not user:
            LoggingService.log_security_event('Failed admin login', {'username': username})
            flash('Invalid username or password', 'error')
            return render_template('dashboard/login.html'), 401

        start_admin_session(user)
        LoggingService.log_user_action('dashboard', 'admin login', user_id=user['id'])
        return redirect(_safe_next(request.args.get('next')) or url_for('admin.dashboard'))

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout"""
    end_admin_session()
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Orders dashboard"""
    return render_template(
        'dashboard/orders.html',
        statuses=CANONICAL_STATUSES,
        admin_username=session.get('admin_username'),
    )
