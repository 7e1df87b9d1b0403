"""
Personnel Management Routes
"""
from flask import Blueprint, flash, redirect, request, url_for

from ...core.formatting import format_date, full_name
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import (Column, FilterSpec, FormField, ListPage, RowAction, handle_form,
                           load_for_edit, load_or_flash, render_list, run_action)
from .service import PersonnelService

personnel_bp = Blueprint('personnel', __name__, url_prefix='/custodian/personnel')

service = PersonnelService()

ACTIVE_OPTIONS = [('active', 'Active'), ('inactive', 'Inactive')]

COLUMNS = [
    Column('last_name', 'Name', render=full_name),
    Column('employee_id', 'Employee No.'),
    Column('username', 'Username'),
    Column('position', 'Position'),
    Column('employment_status', 'Employment'),
    Column('is_active', 'Status', render=lambda p: 'Active' if p.get('is_active') else 'Inactive'),
    Column('created_at', 'Created', render=lambda p: format_date(p.get('created_at'))),
]

FIELDS = [
    FormField('first_name', 'First Name', required=True),
    FormField('last_name', 'Last Name', required=True),
    FormField('employee_id', 'Employee Number', required=True),
    FormField('id_number', 'ID Number', required=True),
    FormField('username', 'Username', required=True),
    FormField('phone', 'Contact Number', help='11 digits, e.g. 0951-341-9336'),
    FormField('employment_status', 'Employment Status', required=True),
    FormField('employment_level', 'Employment Level', required=True),
    FormField('position', 'Position'),
    FormField('subject_area', 'Subject Area'),
    FormField('rating', 'Rating'),
    FormField('notes', 'Notes', type='textarea'),
    FormField('password', 'Portal Password', type='password', help='Leave blank to keep the current password'),
    FormField('password_confirmation', 'Confirm Password', type='password'),
    FormField('is_active', 'Active', type='checkbox'),
]


@personnel_bp.route('')
@role_required('property_custodian')
def personnel_list():
    query = ListQuery.from_args(request.args, filters=('status',))
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None) or {
        'page': paginate([], 1, query.per_page), 'total': 0, 'active': 0}
    return render_list(ListPage(
        title='Personnel Management',
        columns=COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=[('Total Personnel', listing['total']), ('Active', listing['active'])],
        filters=[FilterSpec('status', 'All Status', ACTIVE_OPTIONS)],
        actions=[
            RowAction('Edit', 'personnel.personnel_edit', method='get'),
            RowAction('Deactivate', 'personnel.personnel_deactivate', style='warning',
                      when=lambda p: p.get('is_active'), reason_field='deactivate_reason'),
            RowAction('Activate', 'personnel.personnel_activate', style='success',
                      when=lambda p: not p.get('is_active')),
            RowAction('Delete', 'personnel.personnel_delete', style='danger',
                      confirm='Delete this personnel record?'),
        ],
        create_url=url_for('personnel.personnel_create'),
    ))


@personnel_bp.route('/new', methods=['GET', 'POST'])
@role_required('property_custodian')
def personnel_create():
    existing = load_or_flash(service.list, fallback=[])
    return handle_form(service, FIELDS, 'Add Personnel', 'personnel.personnel_list',
                       record={'is_active': True}, existing=existing)


@personnel_bp.route('/<record_id>/edit', methods=['GET', 'POST'])
@role_required('property_custodian')
def personnel_edit(record_id):
    record, existing = load_for_edit(service, record_id, 'personnel.personnel_list')
    return handle_form(service, FIELDS, 'Edit Personnel', 'personnel.personnel_list',
                       record=record, existing=existing)


@personnel_bp.route('/<record_id>/deactivate', methods=['POST'])
@role_required('property_custodian')
def personnel_deactivate(record_id):
    reason = request.form.get('deactivate_reason', '').strip()
    if not reason:
        flash('Please provide a reason for deactivation.', 'danger')
        return redirect(url_for('personnel.personnel_list'))
    return run_action(lambda: service.deactivate(record_id, reason), 'Personnel deactivated successfully',
                      url_for('personnel.personnel_list'))


@personnel_bp.route('/<record_id>/activate', methods=['POST'])
@role_required('property_custodian')
def personnel_activate(record_id):
    return run_action(lambda: service.activate(record_id), 'Personnel activated successfully',
                      url_for('personnel.personnel_list'))


@personnel_bp.route('/<record_id>/delete', methods=['POST'])
@role_required('property_custodian')
def personnel_delete(record_id):
    return run_action(lambda: service.delete(record_id), 'Personnel deleted successfully',
                      url_for('personnel.personnel_list'))
