"""
Accounting Service
Finance dashboard, inventory analytics and the organisation-wide inventory list
"""
import logging

from ...config.settings import DashboardConfig
from ...core import validation as v
from ...core.api_client import extract_list, get_api_client
from ...core.exports import build_csv, build_pdf
from ...core.formatting import format_currency, format_number, format_relative_time, parse_datetime
from ...core.listing import INVENTORY_CONDITION_ALIASES, apply_query, distinct_values, item_status, paginate
from ..account_settings.service import ProfileService
from ..custodian_dashboard.service import status_tone

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 5
TOP_CHART_ENTRIES = 10
RECENT_ITEMS = 6

STATUS_OPTIONS = [
    ('SERVICEABLE', 'Serviceable'),
    ('UNSERVICEABLE', 'Unserviceable'),
    ('NEEDS REPAIR', 'Needs Repair'),
    ('MISSING/LOST', 'Missing / Lost'),
]
SOURCE_OPTIONS = [('school', 'School Inventory'), ('dcp', 'DCP Inventory')]

STATUS_COLORS = {
    'SERVICEABLE': '#28a745',
    'NEEDS REPAIR': '#ffc107',
    'UNSERVICEABLE': '#dc3545',
    'MISSING/LOST': '#6c757d',
    'Working': '#28a745',
    'For Repair': '#ffc107',
    'Unrepairable': '#dc3545',
    'Lost': '#6c757d',
}
DEFAULT_STATUS_COLOR = 'rgba(108, 117, 125, 0.8)'

SEARCH_FIELDS = ('name', 'description', 'category', 'serial_number', 'item_code', 'brand', 'model',
                 'school_name', 'personnel.full_name')
NUMERIC_FIELDS = ('quantity', 'available_quantity', 'unit_price', 'unit_value', 'total_value')

EXPORT_HEADER = ['Name', 'Category', 'Status', 'Quantity', 'Available', 'Location', 'Brand', 'Model',
                 'Serial Number', 'Amount']
PDF_COL_WIDTHS = [128, 85, 71, 51, 51, 85, 85, 85, 85, 85]
CSV_FILENAME = 'inventory-report.csv'
PDF_FILENAME = 'inventory-report.pdf'
NO_ITEMS_MESSAGE = 'No items to export.'


def _number(value):
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _timestamp(value):
    parsed = parse_datetime(value)
    return parsed.timestamp() if parsed else 0.0


def item_quantity(item):
    """Missing or zero quantity counts as a single unit"""
    return _number(item.get('quantity')) or 1


def item_amount(item):
    return item_quantity(item) * _number(item.get('unit_price') or item.get('unit_value'))


def build_dashboard_data(analytics, inventory, financial, now=None):
    """Aggregate analytics, the newest inventory page and the financial summary"""
    analytics = analytics if isinstance(analytics, dict) else {}
    financial = financial if isinstance(financial, dict) else {}
    summary = analytics.get('summary') or {}
    inventory = extract_list(inventory)

    total_items = summary.get('total_items') or 0
    total_quantity = summary.get('total_quantity') or 0
    total_assigned = summary.get('total_assigned') or 0
    total_unassigned = summary.get('total_unassigned') or 0
    total_inventory_value = _number(financial.get('total_inventory_value'))
    available_value = _number(financial.get('available_inventory_value'))
    assigned_value = _number(financial.get('assigned_inventory_value'))

    by_category = analytics.get('by_category') or []
    by_school = analytics.get('by_school') or []
    by_status = analytics.get('by_status') or []
    top_categories = sorted(by_category, key=lambda c: _number(c.get('value')), reverse=True)[:TOP_CATEGORIES]
    top_schools = sorted(by_school, key=lambda s: _number(s.get('total_value')), reverse=True)[:TOP_CATEGORIES]

    quick_stats = [
        {
            'label': 'Total Inventory Value',
            'value': format_currency(total_inventory_value),
            'trend': f'{format_number(total_items)} items',
            'positive': total_inventory_value > 0,
        },
        {
            'label': 'Available Stock Value',
            'value': format_currency(available_value),
            'trend': f'{format_currency(total_inventory_value - available_value)} assigned',
            'positive': available_value > 0,
        },
        {
            'label': 'Assigned Value',
            'value': format_currency(assigned_value),
            'trend': f'{format_number(total_assigned)} items',
            'positive': assigned_value > 0,
        },
        {
            'label': 'Total Items',
            'value': format_number(total_items),
            'trend': f'{format_number(total_quantity)} total quantity',
            'positive': total_items > 0,
        },
    ]

    newest = sorted(inventory, key=lambda i: _timestamp(i.get('created_at')), reverse=True)[:RECENT_ITEMS]
    recent_activities = [
        {
            'id': item.get('id'),
            'action': 'Inventory item',
            'entity': item.get('name') or item.get('item_code') or 'Unknown Item',
            'type': item.get('type') or 'inventory',
            'value': item.get('total_value') or 0,
            'time': format_relative_time(item.get('created_at'), now=now),
        }
        for item in newest
    ]

    priority_tasks = []
    if total_unassigned > 0:
        priority_tasks.append({
            'task': 'Review unassigned inventory',
            'priority': 'high' if total_unassigned > 50 else 'medium',
            'count': total_unassigned,
        })
    if not by_category:
        priority_tasks.append({'task': 'Categorize inventory items', 'priority': 'medium', 'count': total_items})
    if not top_schools:
        priority_tasks.append({'task': 'Review school inventory distribution', 'priority': 'low', 'count': 0})
    if not priority_tasks:
        priority_tasks.append({'task': 'All systems operational', 'priority': 'low', 'count': 0})

    system_metrics = [
        {'parameter': 'Total Inventory Value', 'value': format_currency(total_inventory_value),
         'status': 'optimal' if total_inventory_value > 0 else 'warning'},
        {'parameter': 'Available Value', 'value': format_currency(available_value),
         'status': 'good' if available_value > 0 else 'warning'},
        {'parameter': 'Assigned Value', 'value': format_currency(assigned_value),
         'status': 'good' if assigned_value > 0 else 'monitor'},
        {'parameter': 'Total Items', 'value': format_number(total_items),
         'status': 'good' if total_items > 0 else 'warning'},
    ]

    alerts = []
    if total_items == 0:
        alerts.append({
            'type': 'warning',
            'title': 'No inventory items',
            'message': 'No inventory items found in the system.',
        })
    if total_assigned > 0 and total_unassigned > total_assigned * 2:
        alerts.append({
            'type': 'info',
            'title': 'High unassigned inventory',
            'message': f'{total_unassigned} items are currently unassigned.',
        })
    if not alerts:
        alerts.append({
            'type': 'success',
            'title': 'Inventory Healthy',
            'message': 'No critical inventory alerts at this time.',
        })

    return {
        'stats': {
            'total_items': total_items,
            'total_quantity': total_quantity,
            'total_value': summary.get('total_value') or 0,
            'total_assigned': total_assigned,
            'total_unassigned': total_unassigned,
            'total_school_inventory': summary.get('total_school_inventory') or 0,
            'total_dcp_inventory': summary.get('total_dcp_inventory') or 0,
            'total_inventory_value': total_inventory_value,
            'available_inventory_value': available_value,
            'assigned_inventory_value': assigned_value,
        },
        'quick_stats': quick_stats,
        'recent_activities': recent_activities,
        'priority_tasks': priority_tasks,
        'system_metrics': system_metrics,
        'alerts': alerts,
        'system_status': status_tone(alerts),
        'top_categories': top_categories,
        'top_schools': top_schools,
        'by_category': by_category,
        'by_status': by_status,
    }


def _dataset(label, data, color):
    return {'label': label, 'data': data, 'backgroundColor': color, 'borderColor': color, 'borderWidth': 2}


def build_chart_data(analytics):
    """Chart.js datasets for the analytics page"""
    analytics = analytics if isinstance(analytics, dict) else {}
    source = analytics.get('school_vs_dcp') or {}
    categories = (analytics.get('by_category') or [])[:TOP_CHART_ENTRIES]
    schools = (analytics.get('by_school') or [])[:TOP_CHART_ENTRIES]
    statuses = analytics.get('by_status') or []
    summary = analytics.get('summary') or {}

    status_colors = [STATUS_COLORS.get(s.get('status'), DEFAULT_STATUS_COLOR) for s in statuses]

    return {
        'stats': {
            'total_items': summary.get('total_items') or 0,
            'total_value': summary.get('total_value') or 0,
            'total_quantity': summary.get('total_quantity') or 0,
            'total_schools': len(analytics.get('by_school') or []),
        },
        'by_source': {
            'labels': ['School Inventory', 'DCP Inventory'],
            'datasets': [_dataset('Inventory Count',
                                  [_number(source.get('school_inventory')), _number(source.get('dcp_inventory'))],
                                  ['#0E254B', '#3b82f6'])],
        },
        'category_value': {
            'labels': [c.get('category') or 'Unknown' for c in categories],
            'datasets': [_dataset('Total Value (₱)', [_number(c.get('value')) for c in categories],
                                  'rgba(255, 159, 64, 0.8)')],
        },
        'category_count': {
            'labels': [c.get('category') or 'Unknown' for c in categories],
            'datasets': [_dataset('Item Count', [_number(c.get('count')) for c in categories],
                                  'rgba(59, 130, 246, 0.8)')],
        },
        'school_items': {
            'labels': [s.get('school_name') or 'Unknown' for s in schools],
            'datasets': [_dataset('Total Items', [_number(s.get('total_items')) for s in schools],
                                  'rgba(14, 37, 75, 0.8)')],
        },
        'school_value': {
            'labels': [s.get('school_name') or 'Unknown' for s in schools],
            'datasets': [_dataset('Total Value (₱)', [_number(s.get('total_value')) for s in schools],
                                  'rgba(16, 185, 129, 0.8)')],
        },
        'status': {
            'labels': [s.get('status') or 'Unknown' for s in statuses],
            'datasets': [_dataset('Status Distribution', [_number(s.get('count')) for s in statuses],
                                  status_colors)],
        },
    }


def inventory_stats(items):
    return {
        'total_items': len(items),
        'school_items': sum(1 for i in items if i.get('type') == 'school'),
        'dcp_items': sum(1 for i in items if i.get('type') == 'dcp'),
        'total_quantity': sum(item_quantity(i) for i in items),
        'total_value': sum(item_amount(i) for i in items),
    }


def _available(item):
    return item['available_quantity'] if item.get('available_quantity') is not None else item_quantity(item)


def _count(value):
    number = _number(value)
    return int(number) if number.is_integer() else number


def export_rows(items, blank=''):
    return [
        [
            item.get('name') or item.get('description') or blank,
            item.get('category') or blank,
            item_status(item) or blank,
            _count(item_quantity(item)),
            _count(_available(item)),
            item.get('location') or blank,
            item.get('brand') or item.get('manufacturer') or blank,
            item.get('model') or blank,
            item.get('serial_number') or blank,
            format_currency(item_amount(item)),
        ]
        for item in items
    ]


class AccountingService:
    """Read-only views over every school's inventory"""

    profile = ProfileService(
        '/accounting/profile/me',
        fields=('first_name', 'last_name', 'username', 'phone'),
        validators={
            'first_name': [v.required('First name is required')],
            'last_name': [v.required('Last name is required')],
            'phone': [v.phone('Contact number must be exactly 11 digits (e.g., 0951-341-9336)')],
        },
        record_keys=('user', 'profile'),
        label='profile',
    )

    def get_dashboard_data(self):
        results = get_api_client().fetch_many({
            'analytics': ('/accounting/analytics', 'analytics'),
            'inventory': ('/accounting/inventory', 'inventory', {'per_page': 100}),
            'financial': ('/accounting/analytics/financial', 'financial'),
        })
        return build_dashboard_data(results['analytics'], results['inventory'], results['financial'])

    def get_analytics(self):
        data, _ = get_api_client().get('/accounting/analytics', label='analytics')
        return build_chart_data(data)

    def get_inventory(self):
        items = get_api_client().fetch_all_pages('/accounting/inventory', per_page=100, label='inventory')
        logger.debug(f'Fetched {len(items)} inventory items across all schools')
        return items

    def get_listing(self, query):
        items = self.get_inventory()
        filtered = apply_query(
            items, query, SEARCH_FIELDS,
            filter_fields={
                'school': ('school_name', None),
                'category': ('category', None),
                'status': (item_status, INVENTORY_CONDITION_ALIASES),
                'source': ('type', None),
            },
            key_funcs={'amount': item_amount, 'status': item_status},
            numeric_fields=NUMERIC_FIELDS,
        )
        return {
            'items': filtered,
            'page': paginate(filtered, query.page, query.per_page),
            'total': len(items),
            'stats': inventory_stats(items),
            'schools': distinct_values(items, 'school_name'),
            'categories': distinct_values(items, 'category'),
        }

    def export_csv(self, items):
        logger.info(f'Exporting {len(items)} accounting inventory rows to CSV')
        return build_csv(EXPORT_HEADER, export_rows(items))

    def export_pdf(self, items):
        logger.info(f'Exporting {len(items)} accounting inventory rows to PDF')
        return build_pdf('INVENTORY REPORT', DashboardConfig.REPORT_TITLE, EXPORT_HEADER,
                         export_rows(items, blank='-'), col_widths=PDF_COL_WIDTHS)
