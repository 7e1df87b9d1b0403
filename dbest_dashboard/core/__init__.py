"""
Core services for dashboard components
"""
import threading
from collections import defaultdict, deque

from ..config.settings import DashboardConfig

# Global state - shared across all components
system_logs = deque(maxlen=DashboardConfig.MAX_LOG_ENTRIES)
api_metrics = defaultdict(lambda: {'requests': 0, 'errors': 0, 'last_status': None, 'last_request': None})
metrics_lock = threading.Lock()

from .errors import (  # noqa: E402
    DashboardError,
    ApiRequestError,
    AuthenticationError,
    AccountDeactivatedError,
    FormValidationError,
)
from .api_client import ApiClient, get_api_client, extract_list, extract_record  # noqa: E402
from .monitoring import ApiMonitor  # noqa: E402
from .logs import configure_logging, get_logs  # noqa: E402

__all__ = [
    'system_logs',
    'api_metrics',
    'metrics_lock',
    'DashboardError',
    'ApiRequestError',
    'AuthenticationError',
    'AccountDeactivatedError',
    'FormValidationError',
    'ApiClient',
    'get_api_client',
    'extract_list',
    'extract_record',
    'ApiMonitor',
    'configure_logging',
    'get_logs',
]
