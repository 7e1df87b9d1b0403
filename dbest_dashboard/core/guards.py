"""
Role-based route guards
"""
from functools import wraps

from flask import jsonify, redirect, session, url_for

from . import auth


def _expire_stale_session():
    if session.get('access_token') and auth.is_token_expired():
        auth.clear_session()


def login_required(view):
    """Any authenticated role; otherwise back to the login page"""
    @wraps(view)
    def wrapped(*args, **kwargs):
        _expire_stale_session()
        if not auth.is_authenticated():
            return redirect(url_for('auth.login'))
        return view(*args, **kwargs)
    return wrapped


def public_only(view):
    """Pages such as /login that an authenticated user should skip"""
    @wraps(view)
    def wrapped(*args, **kwargs):
        _expire_stale_session()
        if auth.is_authenticated():
            return redirect(auth.get_role_home_route(auth.current_user_type()))
        return view(*args, **kwargs)
    return wrapped


def role_required(*roles):
    """Restrict a view to the given user types"""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            _expire_stale_session()
            if not auth.is_authenticated():
                return redirect(url_for('auth.login'))
            if auth.current_user_type() not in roles:
                return redirect(url_for('main.unauthorized'))
            return view(*args, **kwargs)
        return wrapped
    return decorator


def api_role_required(*roles):
    """JSON endpoints answer 401/403 instead of redirecting"""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            _expire_stale_session()
            if not auth.is_authenticated():
                return jsonify({'error': 'Authentication required'}), 401
            if auth.current_user_type() not in roles:
                return jsonify({'error': 'Forbidden'}), 403
            return view(*args, **kwargs)
        return wrapped
    return decorator
