"""
Authentication and session store

The signed Flask session holds access_token, user_type, token_timestamp and
the cached user record. A stored token older than TOKEN_EXPIRATION counts as
expired; a missing timestamp counts as expired too.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from flask import current_app, session

from ..config.settings import DashboardConfig
from .api_client import CONNECTION_ERROR_MESSAGE, get_api_client
from .errors import AccountDeactivatedError, ApiRequestError, AuthenticationError

logger = logging.getLogger(__name__)

SESSION_KEYS = ('access_token', 'user_type', 'token_timestamp', 'user')


@dataclass
class LoginResult:
    success: bool
    user: dict = field(default_factory=dict)
    user_type: Optional[str] = None
    error: Optional[str] = None
    deactivation: Optional[dict] = None


def clear_session():
    for key in SESSION_KEYS:
        session.pop(key, None)


def is_token_expired(now=None):
    """True when there is no timestamp or it is older than TOKEN_EXPIRATION"""
    timestamp = session.get('token_timestamp')
    if not timestamp:
        return True
    now = time.time() if now is None else now
    max_age = current_app.config['TOKEN_EXPIRATION'].total_seconds()
    return now - float(timestamp) > max_age


def is_authenticated():
    return bool(session.get('access_token') and session.get('user_type') and not is_token_expired())


def current_user_type():
    return session.get('user_type')


def current_user():
    return session.get('user') or {}


def is_property_custodian():
    return current_user_type() == 'property_custodian'


def is_teacher():
    return current_user_type() == 'teacher'


def is_ict():
    return current_user_type() == 'ict'


def is_accounting():
    return current_user_type() == 'accounting'


def get_role_home_route(user_type):
    return DashboardConfig.get_role_home_route(user_type)


def login(username, password):
    """Authenticate against POST /auth/login and populate the session"""
    client = get_api_client(authenticated=False)
    try:
        data, _ = client.post('/auth/login', {'username': username, 'password': password})
    except AccountDeactivatedError as e:
        logger.info(f'Login refused for deactivated account {username}')
        return LoginResult(success=False, error=e.message, deactivation=e.deactivation)
    except AuthenticationError as e:
        # 401 on login means bad credentials, not an expired session
        return LoginResult(success=False, error=e.payload.get('message') or 'Login failed')
    except ApiRequestError as e:
        if e.status_code is None:
            return LoginResult(success=False, error=CONNECTION_ERROR_MESSAGE)
        return LoginResult(success=False, error=e.payload.get('message') or 'Login failed')

    data = data or {}
    token = data.get('token')
    user_type = data.get('user_type')
    if not token or not user_type:
        return LoginResult(success=False, error=data.get('message') or 'Login failed')

    session.permanent = True
    session['access_token'] = token
    session['user_type'] = user_type
    session['token_timestamp'] = time.time()
    session['user'] = data.get('user') or {}
    logger.info(f'User {username} logged in as {user_type}')
    return LoginResult(success=True, user=session['user'], user_type=user_type)


def logout():
    """Tell the backend, then clear the session whatever it answers"""
    user_type = current_user_type()
    if session.get('access_token') and user_type:
        prefix = DashboardConfig.get_api_prefix(user_type)
        try:
            get_api_client().post(f'/{prefix}/logout')
        except ApiRequestError as e:
            logger.warning(f'Logout request failed: {e.message}')
    clear_session()


def refresh_user():
    """Re-fetch the user record; only a 401 ends the session"""
    user_type = current_user_type()
    if not session.get('access_token') or not user_type:
        return None
    prefix = DashboardConfig.get_api_prefix(user_type)
    try:
        data, _ = get_api_client().get(f'/{prefix}/user', label='user')
    except AuthenticationError:
        clear_session()
        return None
    except ApiRequestError as e:
        logger.warning(f'Could not refresh user: {e.message}')
        return current_user()

    user = data.get('user', data) if isinstance(data, dict) else {}
    session['user'] = user or {}
    return session['user']
