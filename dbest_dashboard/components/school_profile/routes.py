"""
School Profile Routes
Custodian's school profile and own account settings
"""
from flask import Blueprint, request

from ...core.guards import role_required
from ...core.views import FormField
from ..account_settings import handle_password_form, handle_profile_form
from .service import account_service, school_service

school_profile_bp = Blueprint('school_profile', __name__, url_prefix='/custodian')

SCHOOL_FIELDS = [
    FormField('name', 'School Name', required=True),
    FormField('deped_code', 'DepEd Code'),
    FormField('region', 'Region'),
    FormField('division', 'Division'),
    FormField('district', 'District'),
    FormField('address', 'Address', type='textarea'),
    FormField('contact_person', 'Contact Person'),
    FormField('contact_email', 'Contact Email', type='email'),
    FormField('contact_phone', 'Contact Phone', help='11 digits, e.g. 0951-341-9336'),
    FormField('website', 'Website', type='url', help='https://example.com'),
]

ACCOUNT_FIELDS = [
    FormField('username', 'Username', required=True),
    FormField('first_name', 'First Name', required=True),
    FormField('last_name', 'Last Name', required=True),
    FormField('phone', 'Contact Number'),
]


@school_profile_bp.route('/profile', methods=['GET', 'POST'])
@role_required('property_custodian')
def school_profile():
    return handle_profile_form(school_service, SCHOOL_FIELDS, 'School Profile')


@school_profile_bp.route('/settings', methods=['GET', 'POST'])
@role_required('property_custodian')
def settings():
    """Account details and password change on one page"""
    if request.method == 'POST' and request.form.get('form') == 'password':
        return handle_password_form(title='Change Password')
    return handle_profile_form(account_service, ACCOUNT_FIELDS, 'Account Settings',
                               template='custodian/settings.html')
