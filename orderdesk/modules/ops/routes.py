"""
Ops Routes
==========

Public health endpoint.
"""

import time

from flask import jsonify

from orderdesk.core.exceptions import BackendError, ConfigurationError
from orderdesk.core.logging_service import LoggingService
from . import ops_health_bp

_started_at = time.time()


def _check_config():
    from orderdesk import get_orderdesk
    problems = get_orderdesk().problems
    if problems:
        return {'status': 'critical', 'problems': problems}
    return {'status': 'ok'}


def _check_backend():
    from orderdesk import get_orderdesk
    orderdesk = get_orderdesk()
    started = time.time()
    try:
        store = orderdesk.get_store()
        store.client.ping(store.orders_table)
    except ConfigurationError as e:
        return {'status': 'critical', 'error': str(e)}
    except BackendError as e:
        return {'status': 'critical', 'error': e.message}
    return {'status': 'ok', 'latency_ms': round((time.time() - started) * 1000, 1)}


@ops_health_bp.route('')
@ops_health_bp.route('/')
def health():
    """Health check for uptime monitors"""
    checks = {
        'config': _check_config(),
        'backend': _check_backend(),
        'uptime': {'status': 'ok', 'seconds': round(time.time() - _started_at)},
    }
    critical = any(check['status'] == 'critical' for check in checks.values())
    status = 'critical' if critical else 'ok'

    if critical:
        LoggingService.warning('ops', 'Health check failed', checks)

    return jsonify({'status': status, 'checks': checks}), 503 if critical else 200
