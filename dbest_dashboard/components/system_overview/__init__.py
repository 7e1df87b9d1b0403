"""
System Overview Component
"""
from .. import register_component
from .routes import system_overview_bp
from .service import SystemOverviewService


@register_component('system_overview')
def init_system_overview(app):
    """Initialize System Overview component with Flask app"""
    app.register_blueprint(system_overview_bp)
    return SystemOverviewService()


__all__ = ['system_overview_bp', 'SystemOverviewService', 'init_system_overview']
