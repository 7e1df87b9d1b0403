"""
DCP Packages Service
DepEd Computerization Program deliveries: ICT registers the packages per
school, custodians track their delivery progress and the inventory received
"""
import logging

from ...core import validation as v
from ...core.api_client import extract_list, get_api_client
from ...core.listing import ALL, apply_query, paginate, search, sort_records
from ...core.resources import ResourceService

logger = logging.getLogger(__name__)

DELIVERY_STATUS_OPTIONS = ['Pending', 'In Transit', 'Delivered', 'Partially Delivered', 'Cancelled']
INSTALLATION_STATUS_OPTIONS = ['Not Started', 'Ongoing', 'Completed', 'On Hold']

# Lower-cased union; a package matches on either status
STATUS_FILTER_OPTIONS = list(dict.fromkeys(
    status.lower() for status in DELIVERY_STATUS_OPTIONS + INSTALLATION_STATUS_OPTIONS))

DOCUMENT_TYPES = {
    'dr': 'Delivery Receipt',
    'ptr': 'Property Transfer Report',
    'iar': 'Inspection and Acceptance Report',
}

CATEGORY_OPTIONS = [
    'Laptop', 'Desktop', 'Host Mini PC', 'Host PC', 'UPS', 'AVR', 'Printer', 'Wireless Router',
    'Network Switch', 'TV', 'Monitor', 'Multimedia Speaker', 'Projector', 'External Hard Drive',
    '2 in 1 Tablet PC', 'Charging Cart', 'Photovoltaic Modules', 'Inverter', 'Solar Battery',
    'Solar Power Accessories', 'Lapel', 'Networking Peripherals', 'Desktop Virtualization Device', 'Others',
]
CONDITION_OPTIONS = ['Working', 'For Repair', 'For Part Replacement', 'Unrepairable', 'Lost']
VALIDATION_OPTIONS = ['Unverified', 'Verified']

PACKAGE_DATE_FIELDS = ('delivery_date', 'created_at', 'updated_at')


def _to_int(value, default=1):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def filter_by_status(packages, status):
    """Keep packages whose delivery or installation status equals `status`"""
    if not status or status == ALL:
        return list(packages)
    status = status.lower()
    return [
        pkg for pkg in packages
        if (pkg.get('delivery_status') or '').lower() == status
        or (pkg.get('installation_status') or '').lower() == status
    ]


def package_stats(packages):
    delivered = in_transit = pending = 0
    for pkg in packages:
        delivery = (pkg.get('delivery_status') or '').lower()
        if delivery == 'delivered':
            delivered += 1
        if 'transit' in delivery:
            in_transit += 1
        if delivery in ('', 'pending'):
            pending += 1
    return {'total': len(packages), 'delivered': delivered, 'in_transit': in_transit, 'pending': pending}


def documents(pkg):
    """(type, label, number, filename) for each supporting document on file"""
    result = []
    for doc_type, label in DOCUMENT_TYPES.items():
        filename = pkg.get(f'{doc_type}_filename')
        if filename:
            result.append((doc_type, label, pkg.get(f'{doc_type}_number') or '', filename))
    return result


def form_record(pkg):
    """Package values as the edit form expects them (date inputs take YYYY-MM-DD)"""
    record = dict(pkg)
    record['delivery_date'] = (pkg.get('delivery_date') or '')[:10]
    if pkg.get('school_id') is not None:
        record['school_id'] = str(pkg['school_id'])
    return record


def download_document(package_id, doc_type):
    """Supporting document bytes streamed through the dashboard with the user's token"""
    logger.info(f'Downloading {doc_type} document of DCP package {package_id}')
    return get_api_client().download(f'/dcp-package-file/{package_id}/{doc_type}',
                                     default_filename=f'{doc_type}-{package_id}')


class DcpPackageProgressService(ResourceService):
    """Custodian view: packages delivered to the custodian's school"""

    endpoint = '/property-custodian/dcp-packages'
    label = 'DCP package'
    list_keys = ('packages',)
    fields = ('delivery_date', 'delivery_status', 'installation_status', 'remarks',
              'dr_number', 'ptr_number', 'iar_number')

    SEARCH_FIELDS = ('batch_name', 'details', 'remarks')

    def validators(self, data, record_id=None, existing=()):
        return {'remarks': [v.max_length(1000, 'Remarks must be 1000 characters or less')]}

    def payload(self, data, record_id=None):
        body = dict(data)
        body['delivery_date'] = data.get('delivery_date') or None
        return body

    def get_listing(self, query):
        packages = self.list()
        filtered = filter_by_status(search(packages, query.search, self.SEARCH_FIELDS), query.filter('status'))
        if query.sort:
            filtered = sort_records(filtered, query.sort, query.direction, date_fields=PACKAGE_DATE_FIELDS)
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(packages),
            'stats': package_stats(packages),
        }


class IctDcpPackageService(ResourceService):
    """ICT view: every school's packages, with create/edit/delete"""

    endpoint = '/ict/dcp-packages'
    label = 'DCP package'
    list_keys = ('packages',)
    fields = ('school_id', 'batch_name', 'quantity', 'package_count', 'delivery_date', 'delivery_status',
              'installation_status', 'details', 'remarks', 'dr_number', 'ptr_number', 'iar_number')

    SEARCH_FIELDS = ('batch_name', 'details', 'remarks', 'school.name', 'dr_number', 'ptr_number', 'iar_number')

    def validators(self, data, record_id=None, existing=()):
        return {
            'school_id': [v.required('School assignment is required')],
            'batch_name': [v.required('Batch name is required')],
            'details': [v.required('Provide package details')],
            'quantity': [v.at_least(1, 'Minimum of 1 item')],
            'package_count': [v.at_least(1, 'Minimum of 1 package')],
        }

    def payload(self, data, record_id=None):
        body = dict(data)
        body['school_id'] = _to_int(data.get('school_id'), None)
        body['quantity'] = max(1, _to_int(data.get('quantity')))
        body['package_count'] = max(1, _to_int(data.get('package_count')))
        body['delivery_date'] = data.get('delivery_date') or None
        return body

    def get_listing(self, query):
        packages = self.list()
        filtered = apply_query(packages, query, self.SEARCH_FIELDS, date_fields=PACKAGE_DATE_FIELDS)
        filtered = filter_by_status(filtered, query.filter('status'))
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(packages),
            'stats': package_stats(packages),
        }

    def school_options(self):
        schools = self.client.fetch_list('/ict/schools', 'schools', keys=('schools',))
        return [(str(s.get('id')), s.get('name') or f"School #{s.get('id')}") for s in schools]


class DcpInventoryService(ResourceService):
    """Individual DCP units received by the custodian's school"""

    endpoint = '/property-custodian/dcp-inventory'
    label = 'DCP inventory record'
    list_keys = ('items',)
    fields = ('dcp_package_id', 'category', 'description', 'manufacturer', 'model', 'serial_number',
              'unit_of_measure', 'unit_value', 'quantity', 'property_no', 'personnel_id',
              'condition_status', 'last_checked_at', 'validation_status', 'remarks')

    SEARCH_FIELDS = ('batch_name', 'category', 'description', 'manufacturer', 'model', 'serial_number',
                     'property_no', 'personnel.first_name', 'personnel.last_name')

    def validators(self, data, record_id=None, existing=()):
        return {
            'dcp_package_id': [v.required('DCP package is required')],
            'category': [v.required('Category is required')],
            'description': [v.required('Description is required')],
            'manufacturer': [v.required('Manufacturer is required')],
            'model': [v.required('Model is required')],
            'serial_number': [
                v.required('Serial number is required'),
                v.unique_among(existing, 'serial_number', 'Serial number already exists',
                               current_id=record_id, ignore_case=True),
            ],
            'unit_value': [v.required('Unit value is required'), v.non_negative('Unit value cannot be negative')],
            'quantity': [v.at_least(1, 'Quantity must be greater than zero')],
            'property_no': [v.required('Property number is required')],
            'personnel_id': [v.required('Accountable personnel is required')],
            'last_checked_at': [v.required('Last checked date is required')],
        }

    def payload(self, data, record_id=None):
        body = {key: value for key, value in data.items() if value not in ('', None)}
        body['quantity'] = _to_int(data.get('quantity'))
        body['unit_value'] = float(data['unit_value'])
        return body

    def get_listing(self, query):
        items = self.list()
        filtered = apply_query(items, query, self.SEARCH_FIELDS,
                               filter_fields={'condition': ('condition_status', None)},
                               date_fields=('last_checked_at', 'created_at', 'updated_at'))
        return {
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(items),
            'working': sum(1 for item in items if item.get('condition_status') == 'Working'),
            'filtered': len(filtered),
        }

    def get_form_options(self):
        """Package and personnel choices for the inventory form"""
        results = get_api_client().fetch_many({
            'packages': ('/property-custodian/dcp-packages', 'DCP packages'),
            'personnel': ('/property-custodian/personnel', 'personnel', {'per_page': 1000}),
        })
        packages = [(str(p.get('id')), p.get('batch_name') or f"Package #{p.get('id')}")
                    for p in extract_list(results['packages'], 'packages')]
        personnel = [
            (str(p.get('id')), p.get('full_name') or f"{p.get('first_name', '')} {p.get('last_name', '')}".strip())
            for p in extract_list(results['personnel'])
        ]
        return packages, personnel
