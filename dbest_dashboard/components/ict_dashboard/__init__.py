"""
ICT Dashboard Component
"""
from .. import register_component
from .routes import ict_dashboard_bp
from .service import IctDashboardService


@register_component('ict_dashboard')
def init_ict_dashboard(app):
    """Initialize ICT Dashboard component with Flask app"""
    app.register_blueprint(ict_dashboard_bp)
    return IctDashboardService()


__all__ = ['ict_dashboard_bp', 'IctDashboardService', 'init_ict_dashboard']
