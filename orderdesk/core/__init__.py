"""
OrderDesk Core
==============

Configuration, logging, errors and the backend client shared by the modules.
"""

from .config import Config, validate_config
from .exceptions import OrderDeskError, ConfigurationError, BackendError, InvalidStatusError
from .logging_service import LoggingService
from .supabase import SupabaseClient

__all__ = [
    'Config', 'validate_config',
    'OrderDeskError', 'ConfigurationError', 'BackendError', 'InvalidStatusError',
    'LoggingService',
    'SupabaseClient',
]
