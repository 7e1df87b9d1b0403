"""
DCP Packages Component
"""
from .. import register_component
from .routes import dcp_packages_bp
from .service import DcpInventoryService, DcpPackageProgressService, IctDcpPackageService


@register_component('dcp_packages')
def init_dcp_packages(app):
    """Initialize DCP Packages component with Flask app"""
    app.register_blueprint(dcp_packages_bp)
    return IctDcpPackageService()


__all__ = ['dcp_packages_bp', 'DcpPackageProgressService', 'IctDcpPackageService', 'DcpInventoryService',
           'init_dcp_packages']
