"""
Account Settings Component
"""
from .. import register_component
from .routes import account_settings_bp, handle_password_form, handle_profile_form
from .service import PasswordService, ProfileService, SystemSettingsService


@register_component('account_settings')
def init_account_settings(app):
    """Initialize Account Settings component with Flask app"""
    app.register_blueprint(account_settings_bp)
    return PasswordService()


__all__ = ['account_settings_bp', 'PasswordService', 'ProfileService', 'SystemSettingsService',
           'handle_password_form', 'handle_profile_form', 'init_account_settings']
