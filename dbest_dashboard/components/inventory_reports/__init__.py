"""
Inventory Reports Component
"""
from .. import register_component
from .routes import inventory_reports_bp
from .service import InventoryReportsService


@register_component('inventory_reports')
def init_inventory_reports(app):
    """Initialize Inventory Reports component with Flask app"""
    app.register_blueprint(inventory_reports_bp)
    return InventoryReportsService()


__all__ = ['inventory_reports_bp', 'InventoryReportsService', 'init_inventory_reports']
