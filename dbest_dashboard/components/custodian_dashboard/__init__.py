"""
Property Custodian Dashboard Component
"""
from .. import register_component
from .routes import custodian_dashboard_bp
from .service import CustodianDashboardService, build_dashboard_data


@register_component('custodian_dashboard')
def init_custodian_dashboard(app):
    """Initialize Custodian Dashboard component with Flask app"""
    app.register_blueprint(custodian_dashboard_bp)
    return CustodianDashboardService()


__all__ = ['custodian_dashboard_bp', 'CustodianDashboardService', 'build_dashboard_data',
           'init_custodian_dashboard']
