"""
Account Settings Service
Own-profile updates and password changes, shared by every role
"""
import logging

from ...config.settings import DashboardConfig
from ...core import validation as v
from ...core.api_client import extract_record, get_api_client
from ...core.errors import ApiRequestError, AuthenticationError, FormValidationError

logger = logging.getLogger(__name__)

PASSWORD_FIELDS = ('current_password', 'new_password', 'new_password_confirmation')


class PasswordService:
    """PUT /<prefix>/settings/change-password"""

    def validators(self):
        return {
            'current_password': [v.required('Current password is required.')],
            'new_password': [
                v.required('New password is required.'),
                v.min_length(8, 'Password must be at least 8 characters long.'),
            ],
            'new_password_confirmation': [
                v.required('Please confirm your new password.'),
                v.matches('new_password', 'Passwords do not match.'),
            ],
        }

    def change_password(self, user_type, form):
        data = {name: form.get(name, '') for name in PASSWORD_FIELDS}
        errors = v.validate(data, self.validators())
        if errors:
            raise FormValidationError(errors)

        prefix = DashboardConfig.get_api_prefix(user_type)
        try:
            get_api_client().put(f'/{prefix}/settings/change-password', data, label='password')
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            if e.errors:
                raise FormValidationError(v.merge_api_errors(e), e.message) from e
            raise
        logger.info(f'Password changed for a {user_type} account')


class ProfileService:
    """Read and update a single own-record endpoint"""

    def __init__(self, endpoint, fields, validators=None, update_method='PUT', record_keys=(), label='profile',
                 read_endpoint=None):
        self.endpoint = endpoint
        self.read_endpoint = read_endpoint or endpoint
        self.fields = fields
        self._validators = validators or {}
        self.update_method = update_method
        self.record_keys = record_keys
        self.label = label

    def get_profile(self):
        data, _ = get_api_client().get(self.read_endpoint, label=self.label)
        return extract_record(data, *self.record_keys)

    def update_profile(self, form):
        data = {}
        for name in self.fields:
            value = form.get(name, '')
            data[name] = value.strip() if isinstance(value, str) else value
        errors = v.validate(data, self._validators)
        if errors:
            raise FormValidationError(errors)

        try:
            result, _ = get_api_client().request(self.update_method, self.endpoint, json=data, label=self.label)
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            if e.errors:
                raise FormValidationError(v.merge_api_errors(e), e.message) from e
            raise
        logger.info(f'Updated {self.endpoint}')
        return extract_record(result, *self.record_keys)


class SystemSettingsService:
    """Read-only view of the ICT system settings"""

    def get_settings(self):
        return get_api_client().fetch_list('/ict/settings', 'settings')
