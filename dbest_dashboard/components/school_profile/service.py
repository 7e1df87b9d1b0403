"""
School Profile Service
"""
from ...core import validation as v
from ..account_settings.service import ProfileService

school_service = ProfileService(
    '/property-custodian/school-profile',
    fields=('name', 'deped_code', 'region', 'division', 'district', 'address', 'contact_person',
            'contact_email', 'contact_phone', 'website'),
    validators={
        'name': [v.required('School name is required')],
        'contact_email': [v.email()],
        'contact_phone': [v.phone('Contact number must be exactly 11 digits (e.g., 0951-341-9336)')],
        'website': [v.url('Enter a valid URL (https://example.com)')],
    },
    update_method='POST',
    record_keys=('school',),
    label='school profile',
)

account_service = ProfileService(
    '/property-custodian/profile',
    fields=('username', 'first_name', 'last_name', 'phone'),
    validators={
        'username': [v.required('Username is required.')],
        'first_name': [v.required('First name is required.')],
        'last_name': [v.required('Last name is required.')],
        'phone': [v.phone()],
    },
    update_method='POST',
    record_keys=('user',),
    label='profile',
    read_endpoint='/property-custodian/user',
)
