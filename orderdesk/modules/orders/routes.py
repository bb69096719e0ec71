"""
Orders API Routes
=================

GET  /api/orders         - list orders (status, search, limit, offset)
GET  /api/orders/stats   - per-status counts and revenue
POST /api/products       - line items of one order
POST /api/update-status  - change an order's status
"""

import logging

from flask import request, jsonify, session, current_app

from orderdesk.core.exceptions import BackendError, ConfigurationError, InvalidStatusError
from orderdesk.core.logging_service import LoggingService
from orderdesk.modules.auth.utils import api_login_required
from . import orders_bp

logger = logging.getLogger(__name__)


def _store():
    from orderdesk import get_orderdesk
    return get_orderdesk().get_store()


def _int_arg(name, default, minimum=0):
    """Query parameter as int; missing, malformed or too small values fall back to default"""
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _config_error(e, extra=None):
    logger.error("Backend not configured: %s", e)
    LoggingService.error('orders', 'Backend not configured', {'missing': e.missing})
    body = {'success': False, 'error': 'Server configuration error'}
    body.update(extra or {})
    return jsonify(body), 500


@orders_bp.route('/orders')
@api_login_required
def list_orders():
    """List orders, most recent first"""
    status = request.args.get('status') or None
    if status == 'all':
        status = None
    search = request.args.get('search') or None
    limit = _int_arg('limit', current_app.config.get('ORDERDESK_DEFAULT_PAGE_SIZE', 50), minimum=1)
    offset = _int_arg('offset', 0)

    try:
        orders = _store().list_orders(status=status, search=search, limit=limit, offset=offset)
    except InvalidStatusError as e:
        return jsonify({'success': False, 'error': str(e), 'orders': [], 'total': 0}), 400
    except ConfigurationError as e:
        return _config_error(e, {'orders': [], 'total': 0})
    except BackendError as e:
        logger.error("Error fetching orders: %s", e.message)
        LoggingService.error('orders', 'Error fetching orders', {
            'error': e.message, 'status_code': e.status_code
        })
        return jsonify({'success': False, 'error': e.message, 'orders': [], 'total': 0}), 500
    except Exception as e:
        logger.exception("Unexpected error fetching orders")
        LoggingService.log_error_with_traceback('orders', e)
        return jsonify({'success': False, 'error': str(e), 'orders': [], 'total': 0}), 500

    return jsonify({
        'success': True,
        'orders': orders,
        'total': len(orders)
    })


@orders_bp.route('/orders/stats')
@api_login_required
def order_stats():
    """Dashboard stat cards"""
    try:
        stats = _store().order_stats(search=request.args.get('search') or None)
    except ConfigurationError as e:
        return _config_error(e)
    except BackendError as e:
        logger.error("Error computing order stats: %s", e.message)
        return jsonify({'success': False, 'error': e.message}), 500

    return jsonify({'success': True, 'stats': stats})


@orders_bp.route('/products', methods=['POST'])
@api_login_required
def order_products():
    """Products of one order"""
    try:
        data = request.get_json(force=True, silent=True) or {}
        order_id = data.get('order_id') if isinstance(data, dict) else None

        if not order_id:
            return jsonify({'success': False, 'message': 'No order_id provided'}), 400

        products = _store().get_products(order_id)

    except ConfigurationError as e:
        return _config_error(e)
    except BackendError as e:
        logger.error("Error fetching order products: %s", e.message)
        LoggingService.error('orders', 'Error fetching order products', {'error': e.message})
        return jsonify({'success': False, 'error': e.message}), 500
    except Exception as e:
        logger.exception("Unexpected error fetching order products")
        LoggingService.log_error_with_traceback('orders', e)
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'products': products})


@orders_bp.route('/update-status', methods=['POST'])
@api_login_required
def update_status():
    """Set order_status on one order"""
    try:
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict):
            data = {}
        order_id = data.get('orderId')
        status = data.get('status')

        if not order_id or not status:
            return jsonify({'success': False, 'message': 'Missing orderId or status'}), 400

        new_status = _store().update_status(order_id, status)

    except InvalidStatusError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    except ConfigurationError as e:
        return _config_error(e)
    except BackendError as e:
        logger.error("Error updating order status: %s", e.message)
        LoggingService.error('orders', 'Error updating order status', {
            'order_id': order_id, 'status': status, 'error': e.message
        })
        return jsonify({'success': False, 'message': e.message}), 500
    except Exception as e:
        logger.exception("Unexpected error updating order status")
        LoggingService.log_error_with_traceback('orders', e)
        return jsonify({'success': False, 'message': str(e)}), 500

    LoggingService.log_user_action(
        'orders', f'order {order_id} status -> {new_status.value}',
        user_id=session.get('admin_id')
    )
    return jsonify({'success': True})
