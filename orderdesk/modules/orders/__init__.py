"""
Orders Module
=============

JSON API behind the orders dashboard.

Provides:
- Order listing with search, status filter and pagination
- Per-status stats for the dashboard cards
- Order line items with parsed product ids
- Order status updates
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders',
    __name__,
    url_prefix='/api'
)

from . import routes
from .status import OrderStatus, derive_status
from .store import OrderStore

__all__ = ['orders_bp', 'OrderStatus', 'OrderStore', 'derive_status']
