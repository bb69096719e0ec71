"""
OrderDesk Auth Module

Single admin account authentication:
- JSON login/logout against ADMIN_USERNAME / ADMIN_PASSWORD
- Admin session handling for the order endpoints
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/api/auth'
)

from . import routes
from .credentials import AdminCredentials, check_credentials
from .utils import api_login_required

__all__ = ['auth_bp', 'AdminCredentials', 'check_credentials', 'api_login_required']
