"""
Logging setup and the in-memory log buffer behind /api/logs
"""
import logging
from datetime import datetime

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class BufferHandler(logging.Handler):
    """Append formatted records to the shared system_logs deque"""

    def emit(self, record):
        from . import system_logs

        try:
            system_logs.append({
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            })
        except Exception:
            self.handleError(record)


def configure_logging(level=logging.INFO):
    """basicConfig plus a single BufferHandler on the package logger"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    package_logger = logging.getLogger('dbest_dashboard')
    package_logger.setLevel(level)
    if not any(isinstance(h, BufferHandler) for h in package_logger.handlers):
        package_logger.addHandler(BufferHandler())
    return package_logger


def get_logs(level_filter='ALL', limit=50):
    """Newest `limit` entries, optionally restricted to one level"""
    from . import system_logs

    logs = list(system_logs)
    if level_filter and level_filter != 'ALL':
        logs = [log for log in logs if log.get('level') == level_filter]
    if limit and len(logs) > limit:
        logs = logs[-limit:]
    return logs
