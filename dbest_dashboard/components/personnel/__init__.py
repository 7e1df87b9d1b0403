"""
Personnel Management Component
"""
from .. import register_component
from .routes import personnel_bp
from .service import PersonnelService


@register_component('personnel')
def init_personnel(app):
    """Initialize Personnel Management component with Flask app"""
    app.register_blueprint(personnel_bp)
    return PersonnelService()


__all__ = ['personnel_bp', 'PersonnelService', 'init_personnel']
