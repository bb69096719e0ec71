"""
OrderDesk - Orders Admin Dashboard
==================================

A small Flask admin dashboard for e-commerce orders stored in a hosted
Supabase (PostgREST) backend:
- Single admin login from environment credentials
- Order listing with search, status filter and pagination
- Order line items and status updates
- Health endpoint and persistent application log

Usage:
    from orderdesk import create_app

    app = create_app()
"""

__version__ = '0.1.0'

from .app import OrderDesk, create_app, get_orderdesk

__all__ = ['OrderDesk', 'create_app', 'get_orderdesk']
