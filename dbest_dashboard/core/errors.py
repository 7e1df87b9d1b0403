"""
Dashboard exception types

Three failure categories reach the user: authentication failures (session
cleared, back to login), request failures (toast with the backend message)
and validation failures (inline field messages).
"""


class DashboardError(Exception):
    """Base class for dashboard errors"""

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message or 'Something went wrong'

    def __str__(self):
        return self.message


class ApiRequestError(DashboardError):
    """Backend responded with a failure status or could not be reached"""

    def __init__(self, message=None, status_code=None, errors=None, payload=None):
        super().__init__(message or 'Request failed')
        self.status_code = status_code
        self.errors = errors or {}
        self.payload = payload or {}


class AuthenticationError(ApiRequestError):
    """Backend rejected the bearer token (HTTP 401)"""

    def __init__(self, message=None, payload=None):
        super().__init__(message or 'Your session has expired. Please log in again.',
                         status_code=401, payload=payload)


class AccountDeactivatedError(ApiRequestError):
    """Login refused because the account is deactivated (HTTP 423)"""

    def __init__(self, message=None, deactivation=None, payload=None):
        super().__init__(message or 'Your account is deactivated.',
                         status_code=423, payload=payload)
        self.deactivation = deactivation or {}


class FormValidationError(DashboardError):
    """Client-side validation failed; carries field -> message"""

    def __init__(self, errors, message='Please correct the highlighted fields'):
        super().__init__(message)
        self.errors = dict(errors)
