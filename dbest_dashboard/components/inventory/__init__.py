"""
Inventory Component
"""
from .. import register_component
from .routes import inventory_bp
from .service import AssignedItemsService, CategoryService, InventoryService


@register_component('inventory')
def init_inventory(app):
    """Initialize Inventory component with Flask app"""
    app.register_blueprint(inventory_bp)
    return InventoryService()


__all__ = ['inventory_bp', 'InventoryService', 'CategoryService', 'AssignedItemsService', 'init_inventory']
