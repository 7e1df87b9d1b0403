"""
Account Management Component
"""
from .. import register_component
from .routes import account_management_bp
from .service import AccountingAccountService, PropertyCustodianService, SchoolService


@register_component('account_management')
def init_account_management(app):
    """Initialize Account Management component with Flask app"""
    app.register_blueprint(account_management_bp)
    return SchoolService()


__all__ = ['account_management_bp', 'SchoolService', 'PropertyCustodianService', 'AccountingAccountService',
           'init_account_management']
