"""
System Logs Component
"""
from .. import register_component
from .routes import system_logs_bp
from .service import SystemLogsService


@register_component('system_logs')
def init_system_logs(app):
    """Initialize System Logs component with Flask app"""
    app.register_blueprint(system_logs_bp)
    return SystemLogsService()


__all__ = ['system_logs_bp', 'SystemLogsService', 'init_system_logs']
