"""
Dashboard Module
================

Server-rendered pages for the admin:
- Login form (same credential check as the JSON login)
- Orders dashboard page, which drives the /api endpoints from the browser
"""

from flask import Blueprint

dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
