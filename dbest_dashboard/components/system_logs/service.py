"""
System Logs Service
"""
from ...config.settings import DashboardConfig
from ...core.logs import get_logs

LOG_LEVELS = ('ALL', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class SystemLogsService:
    """Reads the shared in-memory log buffer"""

    def get_logs(self, level_filter='ALL', limit=DashboardConfig.DEFAULT_LOG_LIMIT):
        level_filter = (level_filter or 'ALL').upper()
        if level_filter not in LOG_LEVELS:
            level_filter = 'ALL'
        return get_logs(level_filter=level_filter, limit=limit)
