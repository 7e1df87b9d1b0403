"""
System Overview Service
"""
from flask import current_app

from ...core.monitoring import ApiMonitor


class SystemOverviewService:
    """Backend health and request metrics"""

    def _monitor(self):
        config = current_app.config
        return ApiMonitor(config['API_BASE_URL'], timeout=config['HEALTH_CHECK_TIMEOUT'],
                          http=current_app.extensions.get('dbest_http'))

    def get_system_metrics(self):
        return self._monitor().get_metrics()

    def get_health(self):
        backend = self._monitor().check_backend_health()
        return {
            'status': 'ok' if backend != 'down' else 'degraded',
            'backend': backend,
            'api_base_url': current_app.config['API_BASE_URL'],
        }
