"""
Admin Auth API Routes
=====================

POST /api/auth/login  - check credentials, start the admin session
POST /api/auth/logout - end the admin session
GET  /api/auth/me     - current admin, 401 when not logged in
"""

import logging

from flask import request, jsonify, session

from orderdesk.core.exceptions import ConfigurationError
from orderdesk.core.logging_service import LoggingService
from . import auth_bp
from .credentials import check_credentials
from .utils import start_admin_session, end_admin_session, is_logged_in

logger = logging.getLogger(__name__)


def _credentials():
    from orderdesk import get_orderdesk
    return get_orderdesk().credentials


@auth_bp.route('/login', methods=['POST'])
def login():
    """Admin login"""
    try:
        data = request.get_json(force=True)
        if not isinstance(data, dict):
            raise ValueError('Login body must be a JSON object')

        user = check_credentials(data.get('username'), data.get('password'), _credentials())

    except ConfigurationError as e:
        logger.error("Admin credentials not set: %s", e)
        LoggingService.error('auth', 'Admin credentials not configured', {'missing': e.missing})
        return jsonify({'success': False, 'error': 'Server configuration error'}), 500
    except Exception as e:
        logger.exception("Login error")
        LoggingService.log_error_with_traceback('auth', e)
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    if not user:
        LoggingService.log_security_event('Failed admin login', {
            'username': data.get('username') if isinstance(data.get('username'), str) else None
        })
        return jsonify({'success': False, 'error': 'Invalid username or password'}), 401

    start_admin_session(user)
    LoggingService.log_user_action('auth', 'admin login', user_id=user['id'])
    return jsonify({'success': True, 'user': user})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Admin logout"""
    admin_id = session.get('admin_id')
    end_admin_session()
    if admin_id is not None:
        LoggingService.log_user_action('auth', 'admin logout', user_id=admin_id)
    return jsonify({'success': True})


@auth_bp.route('/me')
def me():
    """Return the logged in admin"""
    if not is_logged_in():
        return jsonify({'success': False, 'error': 'Authentication required'}), 401
    return jsonify({'success': True, 'user': _credentials().admin_user()})
