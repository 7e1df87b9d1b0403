"""
Authentication Component
"""
from .. import register_component
from .routes import auth_bp
from .service import AuthService


@register_component('auth')
def init_auth(app):
    """Initialize Authentication component with Flask app"""
    app.register_blueprint(auth_bp)
    limiter = app.extensions.get('dbest_limiter')
    if limiter is not None:
        login_view = app.view_functions['auth.login']
        app.view_functions['auth.login'] = limiter.limit(app.config['RATELIMIT_LOGIN'], methods=['POST'])(login_view)
    return AuthService()


__all__ = ['auth_bp', 'AuthService', 'init_auth']
