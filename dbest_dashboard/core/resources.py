"""
Base service for REST resources managed through dashboard forms

Create/update/delete are fire-and-refetch: the service sends the change and
the page reloads the list from the backend afterwards.
"""
import logging

from .api_client import extract_record, get_api_client
from .errors import ApiRequestError, AuthenticationError, FormValidationError
from .validation import merge_api_errors, validate

logger = logging.getLogger(__name__)


class ResourceService:
    """CRUD against one REST collection"""

    endpoint = ''
    label = 'records'
    list_params = None
    # Payload keys holding the collection besides data/items
    list_keys = ()
    fields = ()
    # Fields sent only when filled in (e.g. password on edit)
    optional_fields = ('password', 'password_confirmation')

    def __init__(self, client_factory=None):
        self._client_factory = client_factory or get_api_client

    @property
    def client(self):
        return self._client_factory()

    def list(self):
        return self.client.fetch_list(self.endpoint, self.label, params=self.list_params, keys=self.list_keys)

    def get(self, record_id):
        data, _ = self.client.get(f'{self.endpoint}/{record_id}', label=self.label)
        return extract_record(data)

    def find(self, record_id, records=None):
        """Locate a record in the (already fetched) collection"""
        records = self.list() if records is None else records
        for record in records:
            if str(record.get('id')) == str(record_id):
                return record
        return None

    def clean(self, form):
        """Form values for the accepted fields, strings trimmed"""
        data = {}
        for name in self.fields:
            value = form.get(name, '')
            if isinstance(value, str) and 'password' not in name:
                value = value.strip()
            data[name] = value
        return data

    def validators(self, data, record_id=None, existing=()):
        return {}

    def payload(self, data, record_id=None):
        return {
            key: value for key, value in data.items()
            if not (key in self.optional_fields and not value)
        }

    def save(self, form, record_id=None, existing=()):
        """Validate and create (record_id None) or update a record

        Field errors, from local checks or from the backend's `errors`
        payload, are raised as FormValidationError.
        """
        data = self.clean(form)
        errors = validate(data, self.validators(data, record_id, existing))
        if errors:
            raise FormValidationError(errors)

        body = self.payload(data, record_id)
        try:
            if record_id is None:
                result, _ = self.client.post(self.endpoint, body, label=self.label)
            else:
                result, _ = self.client.put(f'{self.endpoint}/{record_id}', body, label=self.label)
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            if e.errors:
                raise FormValidationError(merge_api_errors(e), e.message) from e
            raise

        action = 'Created' if record_id is None else f'Updated {record_id} in'
        logger.info(f'{action} {self.endpoint}')
        return result

    def delete(self, record_id):
        self.client.delete(f'{self.endpoint}/{record_id}', label=self.label)
        logger.info(f'Deleted {record_id} from {self.endpoint}')

    def activate(self, record_id):
        self.client.patch(f'{self.endpoint}/{record_id}/activate', label=self.label)
        logger.info(f'Activated {record_id} in {self.endpoint}')

    def deactivate(self, record_id, reason=None):
        body = {'deactivate_reason': reason} if reason else None
        self.client.patch(f'{self.endpoint}/{record_id}/deactivate', body, label=self.label)
        logger.info(f'Deactivated {record_id} in {self.endpoint}')
