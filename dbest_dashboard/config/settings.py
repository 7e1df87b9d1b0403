"""
Dashboard configuration settings
"""
import os
from datetime import timedelta


class DashboardConfig:
    """Centralized configuration for dashboard"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-here-change-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(days=1)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Server
    HOST = os.environ.get('DBEST_HOST', '0.0.0.0')
    PORT = int(os.environ.get('DBEST_PORT', 8081))

    # Rate limiting
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = "100 per minute"
    RATELIMIT_LOGIN = "10 per minute"

    # Backend REST API
    API_BASE_URL = os.environ.get('DBEST_API_URL', 'http://localhost:8000/api').rstrip('/')
    REQUEST_TIMEOUT = float(os.environ.get('DBEST_REQUEST_TIMEOUT', 10))
    HEALTH_CHECK_TIMEOUT = 3
    MAX_PARALLEL_REQUESTS = 4

    # Stored tokens are treated as expired after one day
    TOKEN_EXPIRATION = timedelta(days=1)

    # Role tables
    ROLES = {
        'property_custodian': {
            'label': 'Property Custodian',
            'home': '/custodian',
            'api_prefix': 'property-custodian',
        },
        'teacher': {
            'label': 'Teacher',
            'home': '/faculty',
            'api_prefix': 'teacher',
        },
        'ict': {
            'label': 'ICT Administrator',
            'home': '/dashboard',
            'api_prefix': 'ict',
        },
        'accounting': {
            'label': 'Accounting',
            'home': '/finance',
            'api_prefix': 'accounting',
        },
    }

    # Listing settings
    DEFAULT_PAGE_SIZE = 10
    PAGE_SIZE_OPTIONS = (5, 10, 25, 50)

    # UI settings
    MAX_LOG_ENTRIES = 1000
    DEFAULT_LOG_LIMIT = 50
    REPORT_TITLE = 'DBEST Inventory System'

    @classmethod
    def get_role_config(cls, user_type):
        """Get configuration for a specific role"""
        return cls.ROLES.get(user_type, {})

    @classmethod
    def get_role_home_route(cls, user_type):
        """Landing route for a role, login page for unknown roles"""
        return cls.get_role_config(user_type).get('home', '/login')

    @classmethod
    def get_api_prefix(cls, user_type):
        return cls.get_role_config(user_type).get('api_prefix', user_type)


class TestingConfig(DashboardConfig):
    TESTING = True
    SECRET_KEY = 'testing'
    API_BASE_URL = 'http://api.test/api'
    RATELIMIT_ENABLED = False
