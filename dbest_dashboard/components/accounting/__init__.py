"""
Accounting Component
"""
from .. import register_component
from .routes import accounting_bp
from .service import AccountingService, build_chart_data, build_dashboard_data


@register_component('accounting')
def init_accounting(app):
    """Initialize Accounting component with Flask app"""
    app.register_blueprint(accounting_bp)
    return AccountingService()


__all__ = ['accounting_bp', 'AccountingService', 'build_chart_data', 'build_dashboard_data', 'init_accounting']
