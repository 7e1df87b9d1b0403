"""
Personnel Management Service
"""
from ...core import validation as v
from ...core.listing import apply_query, paginate
from ...core.resources import ResourceService

SEARCH_FIELDS = ('first_name', 'last_name', 'employee_id', 'id_number', 'username', 'position',
                 'department', 'employment_status', 'employment_level')

UNIQUE_FIELDS = (
    ('employee_id', 'Employee number already exists'),
    ('id_number', 'ID number already exists'),
    ('username', 'Username already exists'),
)


class PersonnelService(ResourceService):
    """School personnel (teachers and staff) with portal accounts"""

    endpoint = '/property-custodian/personnel'
    label = 'personnel'
    list_params = {'per_page': 200}
    fields = (
        'first_name', 'last_name', 'employee_id', 'id_number', 'username', 'phone',
        'employment_status', 'employment_level', 'position', 'subject_area', 'rating',
        'notes', 'password', 'password_confirmation', 'is_active',
    )

    def clean(self, form):
        data = super().clean(form)
        data['is_active'] = form.get('is_active') in ('1', 'on', 'true', True)
        return data

    def validators(self, data, record_id=None, existing=()):
        creating = record_id is None
        checks = {
            'first_name': [v.required('First name is required')],
            'last_name': [v.required('Last name is required')],
            'employee_id': [v.required('Employee number is required')],
            'id_number': [v.required('ID number is required')],
            'username': [v.required('Username is required'), v.username()],
            'phone': [v.phone()],
            'employment_status': [v.required('Employment status is required')],
            'employment_level': [v.required('Employment level is required')],
            'password': [v.password(creating=creating, length=6, strong=False,
                                    required_message='Portal password is required')],
            'password_confirmation': [v.matches(
                'password', required_message='Please confirm the password' if creating else None)],
        }
        for field, message in UNIQUE_FIELDS:
            checks[field].append(v.unique_among(existing, field, message, current_id=record_id))
        return checks

    def get_listing(self, query):
        personnel = self.list()
        filtered = apply_query(personnel, query, SEARCH_FIELDS,
                               filter_fields={'status': ('is_active', None)})
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(personnel),
            'active': sum(1 for p in personnel if p.get('is_active')),
        }
