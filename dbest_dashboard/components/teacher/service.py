"""
Teacher Service
Assigned items and own personnel record for faculty users
"""
import logging

from ...config.settings import DashboardConfig
from ...core import validation as v
from ...core.api_client import extract_list, extract_record, get_api_client
from ...core.exports import build_csv, build_pdf
from ...core.formatting import format_date
from ...core.listing import ASSIGNED_ITEM_STATUS_ALIASES, apply_query, item_status, paginate
from ..account_settings.service import ProfileService

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'description', 'category', 'serial_number', 'property_no', 'brand', 'model')

SOURCE_LABELS = {'school': 'School Inventory', 'dcp': 'DCP Package Inventory'}

CSV_HEADER = ['Source', 'Item Name', 'Category', 'Serial Number', 'Quantity', 'Unit of Measure', 'Status',
              'Brand', 'Model', 'Assigned Date']
PDF_HEADER = ['Source', 'Item Name', 'Category', 'Serial Number', 'Quantity', 'Status', 'Assigned Date']
CSV_FILENAME = 'my-assigned-items-report.csv'
PDF_FILENAME = 'my-assigned-items-report.pdf'
NO_ITEMS_MESSAGE = 'No items to export.'

STATUS_OPTIONS = [('available', 'Available'), ('assigned', 'Assigned'), ('maintenance', 'Maintenance')]
SOURCE_OPTIONS = [('school', 'School Inventory'), ('dcp', 'DCP Package Inventory')]


def normalize_item(record):
    """Flatten an assignment onto its inventory item, DCP fields mapped to school ones"""
    item = dict(record.get('inventory_item') or {})
    item.update({k: val for k, val in record.items() if k != 'inventory_item' and val not in (None, '')})
    kind = item.get('type') or ('dcp' if item.get('dcp_package_id') else 'school')
    item['type'] = kind
    item['source'] = SOURCE_LABELS.get(kind, SOURCE_LABELS['school'])
    item['name'] = item.get('name') or item.get('description')
    item['brand'] = item.get('brand') or item.get('manufacturer')
    item['assigned_at'] = item.get('assigned_at') or item.get('assigned_date') or item.get('created_at')
    if kind == 'dcp':
        item['category'] = item.get('category') or 'Uncategorized'
        item['serial_number'] = item.get('serial_number') or 'N/A'
    return item


def item_stats(items):
    return {
        'total_items': len(items),
        'school_items': sum(1 for i in items if i.get('type') == 'school'),
        'dcp_items': sum(1 for i in items if i.get('type') == 'dcp'),
        'available_items': sum(
            1 for i in items
            if (i.get('status') == 'available' or i.get('condition_status') == 'Working') and i.get('type') == 'school'
        ),
    }


def csv_rows(items):
    return [
        [
            item.get('source') or '',
            item.get('name') or item.get('description') or '',
            item.get('category') or '',
            item.get('serial_number') or '',
            1 if item.get('quantity') is None else item.get('quantity'),
            item.get('unit_of_measure') or 'pcs',
            item_status(item),
            item.get('brand') or item.get('manufacturer') or '',
            item.get('model') or '',
            format_date(item['assigned_at'], '%m/%d/%Y') if item.get('assigned_at') else '',
        ]
        for item in items
    ]


def pdf_rows(items):
    return [
        [
            item.get('source') or '-',
            item.get('name') or item.get('description') or '-',
            item.get('category') or '-',
            item.get('serial_number') or '-',
            f"{item.get('quantity') or 1} {item.get('unit_of_measure') or 'pcs'}",
            item_status(item) or '-',
            format_date(item['assigned_at'], '%m/%d/%Y') if item.get('assigned_at') else '-',
        ]
        for item in items
    ]


class TeacherService:
    """Faculty dashboard, my-items report and personnel record"""

    profile = ProfileService(
        '/teacher/personnel/me',
        fields=('first_name', 'last_name', 'email', 'department'),
        validators={
            'first_name': [v.required('First name is required')],
            'last_name': [v.required('Last name is required')],
            'email': [v.email()],
        },
        record_keys=('personnel',),
        label='personnel details',
    )

    def get_dashboard_data(self):
        results = get_api_client().fetch_many({
            'assigned_items': ('/teacher/assigned-items', 'assigned items'),
            'personnel': ('/teacher/personnel/me', 'personnel details'),
        })
        assigned = extract_list(results['assigned_items'])
        return {
            'assigned_items': assigned,
            'personnel': extract_record(results['personnel'], 'personnel'),
        }

    def get_items(self):
        records = get_api_client().fetch_list('/teacher/assigned-items', 'assigned items')
        return [normalize_item(record) for record in records]

    def get_listing(self, query):
        items = self.get_items()
        filtered = apply_query(
            items, query, SEARCH_FIELDS,
            filter_fields={'source': ('type', None), 'status': (item_status, ASSIGNED_ITEM_STATUS_ALIASES)},
            date_fields=('created_at', 'assigned_at'),
        )
        return {
            'items': filtered,
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(items),
            'stats': item_stats(items),
        }

    def export_csv(self, items):
        logger.info(f'Exporting {len(items)} assigned items to CSV')
        return build_csv(CSV_HEADER, csv_rows(items))

    def export_pdf(self, items, stats=None):
        """Summary block counts all assigned items, the table only the filtered ones"""
        stats = stats or item_stats(items)
        summary = [
            ['Total Items', str(stats['total_items'])],
            ['School Inventory', str(stats['school_items'])],
            ['DCP Packages', str(stats['dcp_items'])],
            ['Available Items', str(stats['available_items'])],
        ]
        logger.info(f'Exporting {len(items)} assigned items to PDF')
        return build_pdf('MY ASSIGNED ITEMS REPORT', DashboardConfig.REPORT_TITLE, PDF_HEADER, pdf_rows(items),
                         summary=summary, col_widths=[85, 140, 100, 100, 70, 70, 85])
