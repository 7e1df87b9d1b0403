"""
Inventory Reports Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...core.exports import NO_DATA_MESSAGE, csv_response, pdf_response
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import load_or_flash
from .service import CSV_FILENAME, PDF_FILENAME, InventoryReportsService, pdf_rows, summarize
from ..inventory.service import STATUS_OPTIONS

inventory_reports_bp = Blueprint('inventory_reports', __name__, url_prefix='/custodian/reports')

service = InventoryReportsService()


def _report_for(query):
    return service.get_report(query.search, query.filter('category'), query.filter('status'),
                              sort=query.sort, direction=query.direction)


@inventory_reports_bp.route('')
@role_required('property_custodian')
def reports():
    """Filtered inventory report"""
    query = ListQuery.from_args(request.args, filters=('category', 'status'), default_sort=None)
    report = load_or_flash(lambda: _report_for(query), fallback=None) or {
        'items': [], 'total': 0, 'categories': [], 'summary': summarize([])}
    page = paginate(report['items'], query.page, query.per_page)
    return render_template(
        'custodian/reports.html',
        report=report,
        page=page,
        rows=pdf_rows(page.items),
        query=query,
        status_options=STATUS_OPTIONS,
    )


def _export(builder):
    query = ListQuery.from_args(request.args, filters=('category', 'status'), default_sort=None)
    report = load_or_flash(lambda: _report_for(query), fallback=None)
    if report is None:
        return redirect(url_for('inventory_reports.reports', **query.to_args()))
    if not report['items']:
        flash(NO_DATA_MESSAGE, 'warning')
        return redirect(url_for('inventory_reports.reports', **query.to_args()))
    return builder(report['items'])


@inventory_reports_bp.route('/export.csv')
@role_required('property_custodian')
def export_csv():
    return _export(lambda items: csv_response(service.export_csv(items), CSV_FILENAME))


@inventory_reports_bp.route('/export.pdf')
@role_required('property_custodian')
def export_pdf():
    return _export(lambda items: pdf_response(service.export_pdf(items), PDF_FILENAME))
