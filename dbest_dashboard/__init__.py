"""
DBEST Inventory Dashboard
"""
from .dashboard_app import DashboardApp, create_app, main

__version__ = '1.0.0'

__all__ = ['DashboardApp', 'create_app', 'main']
