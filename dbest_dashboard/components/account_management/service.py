"""
Account Management Service
Schools, property custodian accounts and accounting accounts administered by ICT
"""
from ...core import validation as v
from ...core.formatting import full_name
from ...core.listing import apply_query, paginate
from ...core.resources import ResourceService

ACCOUNT_SEARCH_FIELDS = (full_name, 'username', 'phone', 'school.name')


def account_validators(data, record_id, existing):
    """Username, names, phone and strong password shared by ICT-managed accounts"""
    creating = record_id is None
    return {
        'username': [
            v.required('Username is required'),
            v.unique_among(existing, 'username', 'This username is already taken',
                           current_id=record_id, ignore_case=True),
        ],
        'first_name': [v.required('First name is required')],
        'last_name': [v.required('Last name is required')],
        'phone': [v.phone('Contact number must be exactly 11 digits (e.g., 0951-341-9336)')],
        'password': [v.password(creating=creating)],
        'password_confirmation': [v.matches('password')],
    }


class ManagedResourceService(ResourceService):
    """List page support: search, active filter, date sort"""

    search_fields = ()

    def get_listing(self, query):
        records = self.list()
        filtered = apply_query(records, query, self.search_fields,
                               filter_fields={'status': ('is_active', None)})
        active = sum(1 for r in records if r.get('is_active'))
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(records),
            'active': active,
            'inactive': len(records) - active,
        }


class SchoolService(ManagedResourceService):
    endpoint = '/ict/schools'
    label = 'school'
    list_keys = ('schools',)
    search_fields = ('name', 'deped_code', 'region', 'division', 'district', 'contact_person',
                     'contact_phone', 'contact_email')
    fields = ('name', 'deped_code', 'region', 'division', 'district', 'address', 'contact_person',
              'contact_email', 'contact_phone', 'website')

    def validators(self, data, record_id=None, existing=()):
        return {
            'name': [v.required('School name is required')],
            'contact_email': [v.email()],
            'contact_phone': [v.phone('Contact number must be exactly 11 digits (e.g., 0951-341-9336)')],
            'website': [v.url('Enter a valid URL (https://example.com)')],
        }


class PropertyCustodianService(ManagedResourceService):
    endpoint = '/ict/property-custodians'
    label = 'property custodian'
    list_params = {'per_page': 1000}
    search_fields = ACCOUNT_SEARCH_FIELDS
    fields = ('username', 'first_name', 'last_name', 'school_id', 'phone', 'password', 'password_confirmation')

    def school_options(self):
        schools = SchoolService(self._client_factory).list()
        return [(str(s.get('id')), s.get('name') or f"School #{s.get('id')}") for s in schools]

    def validators(self, data, record_id=None, existing=()):
        def school_taken(record):
            return f"{(record.get('school') or {}).get('name') or 'This school'} already has a property custodian assigned"

        checks = account_validators(data, record_id, existing)
        checks['school_id'] = [
            v.required('Assigned DepEd School is required'),
            v.unique_among(existing, 'school_id', school_taken, current_id=record_id),
        ]
        return checks


class AccountingAccountService(ManagedResourceService):
    endpoint = '/ict/accountings'
    label = 'accounting account'
    search_fields = ACCOUNT_SEARCH_FIELDS
    fields = ('username', 'first_name', 'last_name', 'phone', 'password', 'password_confirmation')

    def validators(self, data, record_id=None, existing=()):
        return account_validators(data, record_id, existing)
