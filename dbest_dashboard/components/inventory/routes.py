"""
Inventory Routes
"""
from flask import Blueprint, request, url_for

from ...core.formatting import format_currency, format_date, full_name
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import (Column, FilterSpec, FormField, ListPage, RowAction, handle_form,
                           load_for_edit, load_or_flash, render_list, run_action)
from .service import STATUS_OPTIONS, AssignedItemsService, CategoryService, InventoryService

inventory_bp = Blueprint('inventory', __name__, url_prefix='/custodian')

service = InventoryService()
category_service = CategoryService()
assigned_service = AssignedItemsService()

INVENTORY_COLUMNS = [
    Column('item_code', 'Item Code'),
    Column('name', 'Name'),
    Column('category', 'Category'),
    Column('status', 'Status'),
    Column('quantity', 'Qty'),
    Column('available_quantity', 'Available'),
    Column('unit_price', 'Unit Price', render=lambda item: format_currency(item.get('unit_price'))),
    Column('location', 'Location'),
]

CATEGORY_COLUMNS = [
    Column('name', 'Name'),
    Column('description', 'Description', sortable=False),
    Column('items_count', 'Items'),
    Column('created_at', 'Created', render=lambda c: format_date(c.get('created_at'))),
]

ASSIGNED_COLUMNS = [
    Column('inventory_item.name', 'Item'),
    Column('personnel.full_name', 'Assigned To', render=lambda a: full_name(a.get('personnel'))),
    Column('quantity', 'Qty'),
    Column('status', 'Status'),
    Column('assigned_date', 'Assigned', render=lambda a: format_date(a.get('assigned_date'))),
]


def _empty_listing(query):
    return {'page': paginate([], 1, query.per_page), 'total': 0}


def _inventory_fields(categories, personnel):
    return [
        FormField('name', 'Item Name', required=True),
        FormField('description', 'Description', type='textarea'),
        FormField('category_id', 'Category', type='select', options=categories, required=True),
        FormField('personnel_id', 'Accountable Personnel', type='select', options=personnel, required=True),
        FormField('brand', 'Brand'),
        FormField('model', 'Model'),
        FormField('serial_number', 'Serial Number'),
        FormField('unit_of_measure', 'Unit of Measure', required=True, help='e.g. pcs, units, sets'),
        FormField('quantity', 'Quantity', type='number', required=True),
        FormField('available_quantity', 'Available Quantity', type='number', required=True),
        FormField('unit_price', 'Unit Price', type='number'),
        FormField('location', 'Location'),
        FormField('status', 'Status', type='select', options=STATUS_OPTIONS, required=True),
        FormField('purchase_date', 'Purchase Date', type='date'),
        FormField('warranty_expiry', 'Warranty Expiry', type='date'),
        FormField('supplier', 'Supplier'),
        FormField('notes', 'Notes', type='textarea'),
    ]


@inventory_bp.route('/inventory')
@role_required('property_custodian')
def inventory_list():
    query = ListQuery.from_args(request.args, filters=('category', 'status'))
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None) or _empty_listing(query)
    return render_list(ListPage(
        title='Inventory',
        columns=INVENTORY_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        filters=[
            FilterSpec('category', 'All Categories', [(c, c) for c in listing.get('categories', [])]),
            FilterSpec('status', 'All Status', STATUS_OPTIONS),
        ],
        actions=[
            RowAction('Edit', 'inventory.inventory_edit', method='get'),
            RowAction('Delete', 'inventory.inventory_delete', style='danger',
                      confirm='Delete this inventory item? This cannot be undone.'),
        ],
        create_url=url_for('inventory.inventory_create'),
    ))


@inventory_bp.route('/inventory/new', methods=['GET', 'POST'])
@role_required('property_custodian')
def inventory_create():
    categories, personnel = load_or_flash(service.get_form_options, fallback=([], []))
    return handle_form(service, _inventory_fields(categories, personnel), 'Add Inventory Item',
                       'inventory.inventory_list', record={'status': 'available', 'quantity': 0,
                                                           'available_quantity': 0})


@inventory_bp.route('/inventory/<record_id>/edit', methods=['GET', 'POST'])
@role_required('property_custodian')
def inventory_edit(record_id):
    record, _ = load_for_edit(service, record_id, 'inventory.inventory_list')
    categories, personnel = load_or_flash(service.get_form_options, fallback=([], []))
    return handle_form(service, _inventory_fields(categories, personnel), 'Edit Inventory Item',
                       'inventory.inventory_list', record=record)


@inventory_bp.route('/inventory/<record_id>/delete', methods=['POST'])
@role_required('property_custodian')
def inventory_delete(record_id):
    return run_action(lambda: service.delete(record_id), 'Inventory item deleted successfully',
                      url_for('inventory.inventory_list'))


@inventory_bp.route('/inventory/categories')
@role_required('property_custodian')
def category_list():
    query = ListQuery.from_args(request.args, default_sort='name', default_direction='asc')
    listing = load_or_flash(lambda: category_service.get_listing(query), fallback=None) or _empty_listing(query)
    return render_list(ListPage(
        title='Inventory Categories',
        columns=CATEGORY_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        actions=[
            RowAction('Edit', 'inventory.category_edit', method='get'),
            RowAction('Delete', 'inventory.category_delete', style='danger',
                      confirm='Delete this category?'),
        ],
        create_url=url_for('inventory.category_create'),
    ))


CATEGORY_FIELDS = [
    FormField('name', 'Category Name', required=True),
    FormField('description', 'Description', type='textarea', help='Up to 500 characters'),
]


@inventory_bp.route('/inventory/categories/new', methods=['GET', 'POST'])
@role_required('property_custodian')
def category_create():
    return handle_form(category_service, CATEGORY_FIELDS, 'Add Category', 'inventory.category_list')


@inventory_bp.route('/inventory/categories/<record_id>/edit', methods=['GET', 'POST'])
@role_required('property_custodian')
def category_edit(record_id):
    record, _ = load_for_edit(category_service, record_id, 'inventory.category_list')
    return handle_form(category_service, CATEGORY_FIELDS, 'Edit Category', 'inventory.category_list',
                       record=record)


@inventory_bp.route('/inventory/categories/<record_id>/delete', methods=['POST'])
@role_required('property_custodian')
def category_delete(record_id):
    return run_action(lambda: category_service.delete(record_id), 'Category deleted successfully',
                      url_for('inventory.category_list'))


@inventory_bp.route('/assigned-items')
@role_required('property_custodian')
def assigned_items():
    query = ListQuery.from_args(request.args, filters=('status',), default_sort='assigned_date')
    listing = load_or_flash(lambda: assigned_service.get_listing(query), fallback=None) or _empty_listing(query)
    return render_list(ListPage(
        title='Assigned Items',
        columns=ASSIGNED_COLUMNS,
        page=listing['page'],
        query=query,
        total=listing['total'],
        filters=[FilterSpec('status', 'All Status', [(s, s.title()) for s in listing.get('statuses', [])])],
    ))
