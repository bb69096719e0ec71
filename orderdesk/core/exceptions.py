"""
OrderDesk Exceptions
====================

Errors raised by the core services and translated to JSON responses by the
blueprints.
"""


class OrderDeskError(Exception):
    """Base class for OrderDesk errors"""


class ConfigurationError(OrderDeskError):
    """A required setting (credentials, backend URL or key) is missing"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing configuration: {', '.join(self.missing)}")


class BackendError(OrderDeskError):
    """The hosted backend rejected a request or could not be reached"""

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class InvalidStatusError(OrderDeskError, ValueError):
    """A status value outside pending/processing/completed/cancelled"""

    def __init__(self, value):
        self.value = value
        super().__init__(f'Invalid status: {value}')
