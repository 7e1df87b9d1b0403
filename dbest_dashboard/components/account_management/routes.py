"""
Account Management Routes
ICT administration of schools, property custodians and accounting accounts
"""
from flask import Blueprint, flash, redirect, request, url_for

from ...core.formatting import format_date, full_name
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import (Column, FilterSpec, FormField, ListPage, RowAction, handle_form,
                           load_for_edit, load_or_flash, render_list, run_action)
from .service import AccountingAccountService, PropertyCustodianService, SchoolService

account_management_bp = Blueprint('account_management', __name__, url_prefix='/dashboard/ict')

school_service = SchoolService()
custodian_service = PropertyCustodianService()
accounting_service = AccountingAccountService()

ACTIVE_OPTIONS = [('active', 'Active'), ('inactive', 'Inactive')]
STATUS_FILTER = FilterSpec('status', 'All Status', ACTIVE_OPTIONS)


def _status(record):
    return 'Active' if record.get('is_active') else 'Inactive'


def _created(record):
    return format_date(record.get('created_at'))


SCHOOL_COLUMNS = [
    Column('name', 'School'),
    Column('deped_code', 'DepEd Code'),
    Column('division', 'Division'),
    Column('contact_person', 'Contact Person'),
    Column('contact_phone', 'Contact Number'),
    Column('is_active', 'Status', render=_status),
    Column('created_at', 'Created', render=_created),
]

SCHOOL_FIELDS = [
    FormField('name', 'School Name', required=True),
    FormField('deped_code', 'DepEd Code'),
    FormField('region', 'Region'),
    FormField('division', 'Division'),
    FormField('district', 'District'),
    FormField('address', 'Address', type='textarea'),
    FormField('contact_person', 'Contact Person'),
    FormField('contact_email', 'Contact Email', type='email'),
    FormField('contact_phone', 'Contact Number', help='11 digits, e.g. 0951-341-9336'),
    FormField('website', 'Website / Portal URL', type='url'),
]

ACCOUNT_COLUMNS = [
    Column('last_name', 'Name', render=full_name),
    Column('username', 'Username'),
    Column('phone', 'Contact Number'),
    Column('is_active', 'Status', render=_status),
    Column('created_at', 'Created', render=_created),
]

CUSTODIAN_COLUMNS = ACCOUNT_COLUMNS[:2] + [Column('school.name', 'School')] + ACCOUNT_COLUMNS[2:]

ACCOUNT_FIELDS = [
    FormField('username', 'Username', required=True),
    FormField('first_name', 'First Name', required=True),
    FormField('last_name', 'Last Name', required=True),
    FormField('phone', 'Contact Number', help='11 digits, e.g. 0951-341-9336'),
    FormField('password', 'Password', type='password',
              help='At least 8 characters with uppercase, lowercase and a number. '
                   'Leave blank to keep the current password.'),
    FormField('password_confirmation', 'Confirm Password', type='password'),
]


def _account_actions(prefix):
    return [
        RowAction('Edit', f'account_management.{prefix}_edit', method='get'),
        RowAction('Deactivate', f'account_management.{prefix}_deactivate', style='warning',
                  when=lambda r: r.get('is_active'), reason_field='deactivate_reason'),
        RowAction('Activate', f'account_management.{prefix}_activate', style='success',
                  when=lambda r: not r.get('is_active')),
        RowAction('Delete', f'account_management.{prefix}_delete', style='danger',
                  confirm='Delete this account? This action cannot be undone.'),
    ]


def _listing(service, query):
    return load_or_flash(lambda: service.get_listing(query), fallback=None) or {
        'page': paginate([], 1, query.per_page), 'total': 0, 'active': 0, 'inactive': 0}


def _summary(label, listing):
    return [(label, listing['total']), ('Active', listing['active']), ('Inactive', listing['inactive'])]


def _deactivate(service, record_id, list_endpoint, message):
    reason = request.form.get('deactivate_reason', '').strip()
    if not reason:
        flash('Please provide a reason for deactivation.', 'danger')
        return redirect(url_for(list_endpoint))
    return run_action(lambda: service.deactivate(record_id, reason), message, url_for(list_endpoint))


# Schools

@account_management_bp.route('/schools')
@role_required('ict')
def school_list():
    query = ListQuery.from_args(request.args, filters=('status',))
    listing = _listing(school_service, query)
    return render_list(ListPage(
        title='Schools Management',
        columns=SCHOOL_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=_summary('Total Schools', listing),
        filters=[STATUS_FILTER],
        actions=[
            RowAction('Edit', 'account_management.school_edit', method='get'),
            RowAction('Delete', 'account_management.school_delete', style='danger',
                      confirm='Delete this school? This action cannot be undone.'),
        ],
        create_url=url_for('account_management.school_create'),
    ))


@account_management_bp.route('/schools/new', methods=['GET', 'POST'])
@role_required('ict')
def school_create():
    return handle_form(school_service, SCHOOL_FIELDS, 'Register School', 'account_management.school_list',
                       success_message='School registered successfully')


@account_management_bp.route('/schools/<record_id>/edit', methods=['GET', 'POST'])
@role_required('ict')
def school_edit(record_id):
    record, _ = load_for_edit(school_service, record_id, 'account_management.school_list')
    return handle_form(school_service, SCHOOL_FIELDS, 'Edit School', 'account_management.school_list',
                       record=record, success_message='School updated successfully')


@account_management_bp.route('/schools/<record_id>/delete', methods=['POST'])
@role_required('ict')
def school_delete(record_id):
    return run_action(lambda: school_service.delete(record_id), 'School deleted successfully',
                      url_for('account_management.school_list'))


# Property custodians

def _custodian_fields():
    options = load_or_flash(custodian_service.school_options, fallback=[])
    fields = list(ACCOUNT_FIELDS)
    fields.insert(3, FormField('school_id', 'Assigned DepEd School', type='select', options=options, required=True))
    return fields


@account_management_bp.route('/custodians')
@role_required('ict')
def custodian_list():
    query = ListQuery.from_args(request.args, filters=('status',))
    listing = _listing(custodian_service, query)
    return render_list(ListPage(
        title='Property Custodians',
        columns=CUSTODIAN_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=_summary('Total Custodians', listing),
        filters=[STATUS_FILTER],
        actions=_account_actions('custodian'),
        create_url=url_for('account_management.custodian_create'),
    ))


@account_management_bp.route('/custodians/new', methods=['GET', 'POST'])
@role_required('ict')
def custodian_create():
    fields = _custodian_fields()
    existing = load_or_flash(custodian_service.list, fallback=[])
    return handle_form(custodian_service, fields, 'Add Property Custodian', 'account_management.custodian_list',
                       existing=existing, success_message='Property custodian created successfully')


@account_management_bp.route('/custodians/<record_id>/edit', methods=['GET', 'POST'])
@role_required('ict')
def custodian_edit(record_id):
    fields = _custodian_fields()
    record, existing = load_for_edit(custodian_service, record_id, 'account_management.custodian_list')
    return handle_form(custodian_service, fields, 'Edit Property Custodian', 'account_management.custodian_list',
                       record=record, existing=existing,
                       success_message='Property custodian updated successfully')


@account_management_bp.route('/custodians/<record_id>/deactivate', methods=['POST'])
@role_required('ict')
def custodian_deactivate(record_id):
    return _deactivate(custodian_service, record_id, 'account_management.custodian_list',
                       'Property custodian deactivated successfully!')


@account_management_bp.route('/custodians/<record_id>/activate', methods=['POST'])
@role_required('ict')
def custodian_activate(record_id):
    return run_action(lambda: custodian_service.activate(record_id), 'Property custodian activated successfully!',
                      url_for('account_management.custodian_list'))


@account_management_bp.route('/custodians/<record_id>/delete', methods=['POST'])
@role_required('ict')
def custodian_delete(record_id):
    return run_action(lambda: custodian_service.delete(record_id), 'Property custodian deleted successfully!',
                      url_for('account_management.custodian_list'))


# Accounting accounts

@account_management_bp.route('/accounting')
@role_required('ict')
def accounting_list():
    query = ListQuery.from_args(request.args, filters=('status',))
    listing = _listing(accounting_service, query)
    return render_list(ListPage(
        title='Accounting Accounts',
        columns=ACCOUNT_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=_summary('Total Accounts', listing),
        filters=[STATUS_FILTER],
        actions=_account_actions('accounting'),
        create_url=url_for('account_management.accounting_create'),
    ))


@account_management_bp.route('/accounting/new', methods=['GET', 'POST'])
@role_required('ict')
def accounting_create():
    existing = load_or_flash(accounting_service.list, fallback=[])
    return handle_form(accounting_service, ACCOUNT_FIELDS, 'Add Accounting Account',
                       'account_management.accounting_list', existing=existing,
                       success_message='Accounting account created successfully')


@account_management_bp.route('/accounting/<record_id>/edit', methods=['GET', 'POST'])
@role_required('ict')
def accounting_edit(record_id):
    record, existing = load_for_edit(accounting_service, record_id, 'account_management.accounting_list')
    return handle_form(accounting_service, ACCOUNT_FIELDS, 'Edit Accounting Account',
                       'account_management.accounting_list', record=record, existing=existing,
                       success_message='Accounting account updated successfully')


@account_management_bp.route('/accounting/<record_id>/deactivate', methods=['POST'])
@role_required('ict')
def accounting_deactivate(record_id):
    return _deactivate(accounting_service, record_id, 'account_management.accounting_list',
                       'Accounting account deactivated successfully!')


@account_management_bp.route('/accounting/<record_id>/activate', methods=['POST'])
@role_required('ict')
def accounting_activate(record_id):
    return run_action(lambda: accounting_service.activate(record_id), 'Accounting account activated successfully!',
                      url_for('account_management.accounting_list'))


@account_management_bp.route('/accounting/<record_id>/delete', methods=['POST'])
@role_required('ict')
def accounting_delete(record_id):
    return run_action(lambda: accounting_service.delete(record_id), 'Accounting account deleted successfully!',
                      url_for('account_management.accounting_list'))
