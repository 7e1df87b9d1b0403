"""
Backend monitoring service
"""
import logging
from datetime import datetime

import requests

logger = logging.getLogger(__name__)


def record_request(resource, status_code=None, failed=False):
    """Count a backend call against its resource bucket"""
    from . import api_metrics, metrics_lock

    with metrics_lock:
        metrics = api_metrics[resource]
        metrics['requests'] += 1
        if failed:
            metrics['errors'] += 1
        metrics['last_status'] = status_code
        metrics['last_request'] = datetime.now().isoformat()


class ApiMonitor:
    """Health and request metrics for the REST backend"""

    def __init__(self, base_url, timeout=3, http=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests

    def check_backend_health(self):
        """Check that the backend base URL answers

        Any HTTP answer below 500 means the API process is up (the base URL
        itself may well be a 404 on the backend).
        """
        try:
            response = self.http.request('GET', self.base_url, headers={'Accept': 'application/json'},
                                         timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f'Backend health check failed: {e}')
            return 'down'

        if response.status_code < 500:
            return 'healthy'
        logger.warning(f'Backend health check returned HTTP {response.status_code}')
        return 'unhealthy'

    def get_metrics(self):
        """Aggregate request metrics across resources"""
        from . import api_metrics, metrics_lock, system_logs

        with metrics_lock:
            resources = {name: dict(values) for name, values in api_metrics.items()}

        total_requests = sum(m['requests'] for m in resources.values())
        total_errors = sum(m['errors'] for m in resources.values())

        return {
            'total_requests': total_requests,
            'total_errors': total_errors,
            'error_rate': (total_errors / max(total_requests, 1)) * 100,
            'resources': resources,
            'logs_count': len(system_logs),
        }
