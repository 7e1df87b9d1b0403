"""
Inventory Reports Service
Filtered school inventory with summary totals and CSV/PDF export
"""
import logging

from ...config.settings import DashboardConfig
from ...core.api_client import get_api_client
from ...core.exports import build_csv, build_pdf
from ...core.formatting import format_currency
from ...core.listing import distinct_values, filter_by, search, sort_records

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'item_code', 'category', 'brand', 'model', 'serial_number', 'location',
                 'supplier', 'notes')

CSV_HEADER = ['Item Code', 'Name', 'Category', 'Status', 'Quantity', 'Available Quantity', 'Location',
              'Brand', 'Model', 'Serial Number', 'Supplier']

PDF_HEADER = ['Item Code', 'Name', 'Category', 'Status', 'Qty', 'Available', 'Location', 'Brand / Model']
PDF_COL_WIDTHS = [70, 130, 85, 62, 42, 56, 100, 130]

CSV_FILENAME = 'inventory-report.csv'
PDF_FILENAME = 'inventory-report.pdf'


def _number(value):
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _count(value):
    number = _number(value)
    return int(number) if number.is_integer() else number


def _or_zero(value):
    return 0 if value is None else value


def filter_inventory(items, term='', category='all', status='all'):
    result = search(items, term, SEARCH_FIELDS)
    result = filter_by(result, 'category', category)
    return filter_by(result, 'status', status)


def summarize(items):
    """Totals over the filtered set"""
    return {
        'total_items': len(items),
        'total_quantity': _count(sum(_number(i.get('quantity')) for i in items)),
        'available_quantity': _count(sum(_number(i.get('available_quantity')) for i in items)),
        'total_value': sum(_number(i.get('quantity')) * _number(i.get('unit_price')) for i in items),
    }


def csv_rows(items):
    return [
        [
            item.get('item_code') or '',
            item.get('name') or '',
            item.get('category') or '',
            item.get('status') or 'available',
            _or_zero(item.get('quantity')),
            _or_zero(item.get('available_quantity')),
            item.get('location') or '',
            item.get('brand') or '',
            item.get('model') or '',
            item.get('serial_number') or '',
            item.get('supplier') or '',
        ]
        for item in items
    ]


def pdf_rows(items):
    return [
        [
            item.get('item_code') or '-',
            item.get('name') or '-',
            item.get('category') or '-',
            item.get('status') or 'available',
            _count(item.get('quantity')),
            _count(item.get('available_quantity')),
            item.get('location') or '-',
            f"{item.get('brand') or ''} {item.get('model') or ''}".strip() or '-',
        ]
        for item in items
    ]


class InventoryReportsService:
    """Report over the custodian's school inventory"""

    def fetch_inventory(self):
        return get_api_client().fetch_list('/property-custodian/inventory', 'inventory', params={'per_page': 1000})

    def get_report(self, term='', category='all', status='all', sort=None, direction='desc'):
        items = self.fetch_inventory()
        filtered = filter_inventory(items, term, category, status)
        if sort:
            filtered = sort_records(filtered, sort, direction, numeric_fields=('quantity', 'available_quantity'))
        return {
            'items': filtered,
            'total': len(items),
            'categories': distinct_values(items, 'category'),
            'summary': summarize(filtered),
        }

    def export_csv(self, items):
        logger.info(f'Exporting {len(items)} inventory rows to CSV')
        return build_csv(CSV_HEADER, csv_rows(items))

    def export_pdf(self, items):
        logger.info(f'Exporting {len(items)} inventory rows to PDF')
        summary = summarize(items)
        summary_rows = [
            ['Total Items (filtered)', str(summary['total_items'])],
            ['Total Quantity', str(summary['total_quantity'])],
            ['Available Quantity', str(summary['available_quantity'])],
            ['Estimated Total Value', format_currency(summary['total_value'])],
        ]
        return build_pdf('INVENTORY REPORT', DashboardConfig.REPORT_TITLE, PDF_HEADER, pdf_rows(items),
                         summary=summary_rows, col_widths=PDF_COL_WIDTHS)
