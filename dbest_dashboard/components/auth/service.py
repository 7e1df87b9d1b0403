"""
Authentication Service
"""
import logging

from ...core import auth

logger = logging.getLogger(__name__)


class AuthService:
    """Login form handling on top of the session store"""

    EMPTY_FIELDS_MESSAGE = 'Please fill in all fields'

    def validate_credentials(self, username, password):
        """Blank fields are rejected before any backend call"""
        if not username or not password:
            return self.EMPTY_FIELDS_MESSAGE
        return None

    def login(self, username, password):
        error = self.validate_credentials(username, password)
        if error:
            return auth.LoginResult(success=False, error=error)
        return auth.login(username, password)

    def logout(self):
        auth.logout()

    def welcome_message(self, result):
        first_name = (result.user or {}).get('first_name')
        return f'Welcome back, {first_name}!' if first_name else 'Welcome back!'

    def deactivation_details(self, deactivation):
        """Readable lines for the deactivated-account notice"""
        deactivation = deactivation or {}
        details = []
        if deactivation.get('reason'):
            details.append(f"Reason: {deactivation['reason']}")
        if deactivation.get('deactivated_at'):
            details.append(f"Deactivated on: {deactivation['deactivated_at']}")
        if deactivation.get('deactivated_by'):
            details.append(f"Deactivated by: {deactivation['deactivated_by']}")
        return details
