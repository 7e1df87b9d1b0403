"""
Inventory Service
Inventory items, inventory categories and assigned items of the custodian's school
"""
import logging

from ...core import validation as v
from ...core.api_client import extract_list, get_api_client
from ...core.listing import apply_query, distinct_values, paginate
from ...core.resources import ResourceService

logger = logging.getLogger(__name__)

STATUS_OPTIONS = [
    ('available', 'Available'),
    ('assigned', 'Assigned'),
    ('maintenance', 'Maintenance'),
    ('disposed', 'Disposed'),
]

INVENTORY_SEARCH_FIELDS = ('name', 'category', 'brand', 'model', 'serial_number', 'location', 'supplier', 'notes')
INVENTORY_DATE_FIELDS = ('created_at', 'updated_at', 'purchase_date', 'warranty_expiry')
INVENTORY_NUMERIC_FIELDS = ('quantity', 'available_quantity', 'unit_price')


def _to_int(value, default=0):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _to_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class InventoryService(ResourceService):
    endpoint = '/property-custodian/inventory'
    label = 'inventory'
    list_params = {'per_page': 1000}
    fields = (
        'name', 'description', 'category_id', 'brand', 'model', 'serial_number',
        'unit_of_measure', 'quantity', 'available_quantity', 'unit_price', 'location',
        'status', 'purchase_date', 'warranty_expiry', 'supplier', 'notes', 'personnel_id',
    )

    def validators(self, data, record_id=None, existing=()):
        return {
            'name': [v.required('Item name is required')],
            'category_id': [v.required('Category is required')],
            'personnel_id': [v.required('Personnel assignment is required')],
            'unit_of_measure': [v.required('Unit of measure is required')],
            'quantity': [v.non_negative('Quantity must be 0 or greater')],
            'available_quantity': [
                v.non_negative('Available quantity must be 0 or greater'),
                v.not_greater_than('quantity', 'Available quantity cannot exceed total quantity'),
            ],
            'unit_price': [v.non_negative('Unit price cannot be negative', required_value=False)],
            'status': [v.required('Status is required')],
        }

    def payload(self, data, record_id=None):
        body = {key: value for key, value in data.items() if value not in ('', None)}
        body['quantity'] = _to_int(data.get('quantity'))
        body['available_quantity'] = _to_int(data.get('available_quantity'))
        if data.get('unit_price') not in ('', None):
            body['unit_price'] = _to_float(data['unit_price'])
        return body

    def get_form_options(self):
        """Category and personnel choices for the item form"""
        results = get_api_client().fetch_many({
            'categories': ('/property-custodian/inventory-categories/list', 'categories'),
            'personnel': ('/property-custodian/personnel', 'personnel', {'per_page': 200}),
        })
        categories = [(str(c.get('id')), c.get('name', '')) for c in extract_list(results['categories'])]
        personnel = [
            (str(p.get('id')), p.get('full_name') or f"{p.get('first_name', '')} {p.get('last_name', '')}".strip())
            for p in extract_list(results['personnel'])
        ]
        return categories, personnel

    def get_listing(self, query):
        items = self.list()
        filtered = apply_query(
            items, query, INVENTORY_SEARCH_FIELDS,
            filter_fields={'category': ('category', None), 'status': ('status', None)},
            date_fields=INVENTORY_DATE_FIELDS,
            numeric_fields=INVENTORY_NUMERIC_FIELDS,
        )
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(items),
            'categories': distinct_values(items, 'category'),
        }


class CategoryService(ResourceService):
    endpoint = '/property-custodian/inventory-categories'
    label = 'category'
    fields = ('name', 'description')

    def validators(self, data, record_id=None, existing=()):
        return {
            'name': [v.required('Category name is required')],
            'description': [v.max_length(500, 'Description must be 500 characters or less')],
        }

    def get_listing(self, query):
        categories = self.list()
        filtered = apply_query(categories, query, ('name', 'description'))
        return {'page': paginate(filtered, query.page, query.per_page), 'total': len(categories)}


class AssignedItemsService(ResourceService):
    endpoint = '/property-custodian/assigned-items'
    label = 'assigned items'
    list_params = {'per_page': 1000}

    SEARCH_FIELDS = ('inventory_item.name', 'inventory_item.item_code', 'inventory_item.serial_number',
                     'personnel.full_name', 'notes')

    def get_listing(self, query):
        assignments = self.list()
        filtered = apply_query(
            assignments, query, self.SEARCH_FIELDS,
            filter_fields={'status': ('status', None)},
            date_fields=('assigned_date', 'created_at', 'returned_date'),
        )
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(assignments),
            'statuses': distinct_values(assignments, 'status'),
        }
