"""
OrderDesk Modules
=================

Flask blueprint modules for the orders admin.
"""

__all__ = ['auth', 'dashboard', 'ops', 'orders']
