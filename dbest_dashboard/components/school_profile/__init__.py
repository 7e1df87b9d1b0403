"""
School Profile Component
"""
from .. import register_component
from .routes import school_profile_bp
from .service import account_service, school_service


@register_component('school_profile')
def init_school_profile(app):
    """Initialize School Profile component with Flask app"""
    app.register_blueprint(school_profile_bp)
    return school_service


__all__ = ['school_profile_bp', 'school_service', 'account_service', 'init_school_profile']
