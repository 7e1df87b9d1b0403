"""
Backups Component
"""
from .. import register_component
from .routes import backups_bp
from .service import BackupService


@register_component('backups')
def init_backups(app):
    """Initialize Backups component with Flask app"""
    app.register_blueprint(backups_bp)
    return BackupService()


__all__ = ['backups_bp', 'BackupService', 'init_backups']
