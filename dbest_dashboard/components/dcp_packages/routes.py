"""
DCP Packages Routes
"""
import io

from flask import Blueprint, abort, redirect, request, send_file, url_for

from ...core.formatting import format_date, full_name
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import (Column, FilterSpec, FormField, ListPage, RowAction, handle_form,
                           load_for_edit, load_or_flash, render_list, run_action)
from .service import (CATEGORY_OPTIONS, CONDITION_OPTIONS, DELIVERY_STATUS_OPTIONS, DOCUMENT_TYPES,
                      INSTALLATION_STATUS_OPTIONS, STATUS_FILTER_OPTIONS, VALIDATION_OPTIONS,
                      DcpInventoryService, DcpPackageProgressService, IctDcpPackageService,
                      documents, download_document, form_record)

dcp_packages_bp = Blueprint('dcp_packages', __name__)

progress_service = DcpPackageProgressService()
ict_service = IctDcpPackageService()
inventory_service = DcpInventoryService()

STATUS_FILTER = FilterSpec('status', 'All Status', [(s, s.title()) for s in STATUS_FILTER_OPTIONS])


def _choices(options):
    return [(option, option) for option in options]


def _document_links(endpoint):
    def links(pkg):
        return [
            (f'{doc_type.upper()} {number or filename}',
             url_for(endpoint, record_id=pkg.get('id'), doc_type=doc_type))
            for doc_type, _, number, filename in documents(pkg)
        ]
    return links


def _package_columns(document_endpoint, with_school=False):
    columns = [
        Column('batch_name', 'Batch'),
        Column('quantity', 'Items'),
        Column('package_count', 'Packages'),
        Column('delivery_date', 'Delivery Date', render=lambda p: format_date(p.get('delivery_date'))),
        Column('delivery_status', 'Delivery'),
        Column('installation_status', 'Installation'),
        Column('documents', 'Documents', sortable=False, links=_document_links(document_endpoint)),
    ]
    if with_school:
        columns.insert(1, Column('school.name', 'School'))
    return columns


def _package_summary(listing):
    stats = listing.get('stats') or {}
    return [
        ('Total Packages', stats.get('total', 0)),
        ('Delivered', stats.get('delivered', 0)),
        ('In Transit', stats.get('in_transit', 0)),
        ('Pending', stats.get('pending', 0)),
    ]


def _empty_listing(query):
    return {'page': paginate([], 1, query.per_page), 'total': 0, 'stats': {}}


def _send_document(record_id, doc_type, list_endpoint):
    if doc_type not in DOCUMENT_TYPES:
        abort(404)
    result = load_or_flash(lambda: download_document(record_id, doc_type), fallback=None)
    if result is None:
        return redirect(url_for(list_endpoint))
    content, name, content_type = result
    return send_file(io.BytesIO(content), mimetype=content_type, as_attachment=False, download_name=name)


PROGRESS_FIELDS = [
    FormField('delivery_date', 'Delivery Date', type='date'),
    FormField('delivery_status', 'Delivery Status', type='select', options=_choices(DELIVERY_STATUS_OPTIONS)),
    FormField('installation_status', 'Installation Status', type='select',
              options=_choices(INSTALLATION_STATUS_OPTIONS)),
    FormField('dr_number', 'DR Number', help=DOCUMENT_TYPES['dr']),
    FormField('ptr_number', 'PTR Number', help=DOCUMENT_TYPES['ptr']),
    FormField('iar_number', 'IAR Number', help=DOCUMENT_TYPES['iar']),
    FormField('remarks', 'Remarks', type='textarea'),
]


# Property custodian

@dcp_packages_bp.route('/custodian/dcp-packages')
@role_required('property_custodian')
def package_tracking():
    query = ListQuery.from_args(request.args, filters=('status',), default_sort=None)
    listing = load_or_flash(lambda: progress_service.get_listing(query), fallback=None) or _empty_listing(query)
    return render_list(ListPage(
        title='DCP Package Tracking',
        subtitle='DCP deliveries assigned to your school and their supporting documents',
        columns=_package_columns('dcp_packages.package_document'),
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=_package_summary(listing),
        filters=[STATUS_FILTER],
        actions=[RowAction('Update Progress', 'dcp_packages.package_progress', method='get')],
    ))


@dcp_packages_bp.route('/custodian/dcp-packages/<record_id>/progress', methods=['GET', 'POST'])
@role_required('property_custodian')
def package_progress(record_id):
    record, _ = load_for_edit(progress_service, record_id, 'dcp_packages.package_tracking')
    title = f"Update Progress: {record.get('batch_name') or 'DCP Package'}"
    return handle_form(progress_service, PROGRESS_FIELDS, title, 'dcp_packages.package_tracking',
                       record=form_record(record), success_message='Package progress saved!')


@dcp_packages_bp.route('/custodian/dcp-packages/<record_id>/documents/<doc_type>')
@role_required('property_custodian')
def package_document(record_id, doc_type):
    return _send_document(record_id, doc_type, 'dcp_packages.package_tracking')


INVENTORY_COLUMNS = [
    Column('batch_name', 'Batch'),
    Column('category', 'Category'),
    Column('description', 'Description'),
    Column('serial_number', 'Serial Number'),
    Column('property_no', 'Property No.'),
    Column('personnel.last_name', 'Accountable', render=lambda item: full_name(item.get('personnel'))),
    Column('condition_status', 'Condition'),
    Column('validation_status', 'Validation'),
    Column('last_checked_at', 'Last Checked', render=lambda item: format_date(item.get('last_checked_at'))),
]


def _inventory_fields(packages, personnel):
    return [
        FormField('dcp_package_id', 'DCP Package', type='select', options=packages, required=True),
        FormField('category', 'Category', type='select', options=_choices(CATEGORY_OPTIONS), required=True),
        FormField('description', 'Description', required=True),
        FormField('manufacturer', 'Manufacturer', required=True),
        FormField('model', 'Model', required=True),
        FormField('serial_number', 'Serial Number', required=True),
        FormField('property_no', 'Property Number', required=True),
        FormField('unit_of_measure', 'Unit of Measure'),
        FormField('unit_value', 'Unit Value', type='number', required=True),
        FormField('quantity', 'Quantity', type='number', required=True),
        FormField('personnel_id', 'Accountable Personnel', type='select', options=personnel, required=True),
        FormField('condition_status', 'Condition', type='select', options=_choices(CONDITION_OPTIONS)),
        FormField('last_checked_at', 'Last Checked', type='date', required=True),
        FormField('validation_status', 'Validation', type='select', options=_choices(VALIDATION_OPTIONS)),
        FormField('remarks', 'Remarks', type='textarea'),
    ]


@dcp_packages_bp.route('/custodian/dcp-inventory')
@role_required('property_custodian')
def inventory_list():
    query = ListQuery.from_args(request.args, filters=('condition',))
    listing = load_or_flash(lambda: inventory_service.get_listing(query), fallback=None) or {
        'page': paginate([], 1, query.per_page), 'total': 0, 'working': 0, 'filtered': 0}
    return render_list(ListPage(
        title='DCP Inventory',
        columns=INVENTORY_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=[('Total Units', listing['total']), ('Working', listing['working']),
                 ('Shown', listing['filtered'])],
        filters=[FilterSpec('condition', 'All Conditions', _choices(CONDITION_OPTIONS))],
        actions=[
            RowAction('Edit', 'dcp_packages.inventory_edit', method='get'),
            RowAction('Delete', 'dcp_packages.inventory_delete', style='danger',
                      confirm='Remove this DCP inventory record?'),
        ],
        create_url=url_for('dcp_packages.inventory_create'),
    ))


@dcp_packages_bp.route('/custodian/dcp-inventory/new', methods=['GET', 'POST'])
@role_required('property_custodian')
def inventory_create():
    packages, personnel = load_or_flash(inventory_service.get_form_options, fallback=([], []))
    existing = load_or_flash(inventory_service.list, fallback=[])
    return handle_form(inventory_service, _inventory_fields(packages, personnel), 'Add DCP Inventory',
                       'dcp_packages.inventory_list', existing=existing,
                       record={'quantity': 1, 'condition_status': 'Working', 'validation_status': 'Unverified'})


@dcp_packages_bp.route('/custodian/dcp-inventory/<record_id>/edit', methods=['GET', 'POST'])
@role_required('property_custodian')
def inventory_edit(record_id):
    record, existing = load_for_edit(inventory_service, record_id, 'dcp_packages.inventory_list')
    packages, personnel = load_or_flash(inventory_service.get_form_options, fallback=([], []))
    record = dict(record, last_checked_at=(record.get('last_checked_at') or '')[:10])
    return handle_form(inventory_service, _inventory_fields(packages, personnel), 'Edit DCP Inventory',
                       'dcp_packages.inventory_list', record=record, existing=existing)


@dcp_packages_bp.route('/custodian/dcp-inventory/<record_id>/delete', methods=['POST'])
@role_required('property_custodian')
def inventory_delete(record_id):
    return run_action(lambda: inventory_service.delete(record_id), 'DCP inventory record removed',
                      url_for('dcp_packages.inventory_list'))


# ICT

def _package_fields(schools):
    return [
        FormField('school_id', 'School', type='select', options=schools, required=True),
        FormField('batch_name', 'Batch Name', required=True),
        FormField('quantity', 'Number of Items', type='number', required=True),
        FormField('package_count', 'Number of Packages', type='number', required=True),
        FormField('details', 'Package Details', type='textarea', required=True),
    ] + PROGRESS_FIELDS


@dcp_packages_bp.route('/dashboard/ict/dcp-packages')
@role_required('ict')
def package_list():
    query = ListQuery.from_args(request.args, filters=('status',), default_sort='delivery_date')
    listing = load_or_flash(lambda: ict_service.get_listing(query), fallback=None) or _empty_listing(query)
    return render_list(ListPage(
        title='DCP Package Management',
        columns=_package_columns('dcp_packages.package_file', with_school=True),
        page=listing['page'],
        query=query,
        total=listing['total'],
        summary=_package_summary(listing),
        filters=[STATUS_FILTER],
        actions=[
            RowAction('Edit', 'dcp_packages.package_edit', method='get'),
            RowAction('Delete', 'dcp_packages.package_delete', style='danger',
                      confirm='Delete this DCP package?'),
        ],
        create_url=url_for('dcp_packages.package_create'),
    ))


@dcp_packages_bp.route('/dashboard/ict/dcp-packages/new', methods=['GET', 'POST'])
@role_required('ict')
def package_create():
    schools = load_or_flash(ict_service.school_options, fallback=[])
    return handle_form(ict_service, _package_fields(schools), 'New DCP Package', 'dcp_packages.package_list',
                       record={'quantity': 1, 'package_count': 1})


@dcp_packages_bp.route('/dashboard/ict/dcp-packages/<record_id>/edit', methods=['GET', 'POST'])
@role_required('ict')
def package_edit(record_id):
    record, _ = load_for_edit(ict_service, record_id, 'dcp_packages.package_list')
    schools = load_or_flash(ict_service.school_options, fallback=[])
    return handle_form(ict_service, _package_fields(schools), 'Edit DCP Package', 'dcp_packages.package_list',
                       record=form_record(record))


@dcp_packages_bp.route('/dashboard/ict/dcp-packages/<record_id>/delete', methods=['POST'])
@role_required('ict')
def package_delete(record_id):
    return run_action(lambda: ict_service.delete(record_id), 'DCP package deleted successfully!',
                      url_for('dcp_packages.package_list'))


@dcp_packages_bp.route('/dashboard/ict/dcp-packages/<record_id>/documents/<doc_type>')
@role_required('ict')
def package_file(record_id, doc_type):
    return _send_document(record_id, doc_type, 'dcp_packages.package_list')
