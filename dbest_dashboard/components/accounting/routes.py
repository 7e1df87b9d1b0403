"""
Accounting Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...core.exports import csv_response, pdf_response
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import FormField, load_or_flash
from ..account_settings import handle_password_form, handle_profile_form
from .service import (CSV_FILENAME, NO_ITEMS_MESSAGE, PDF_FILENAME, SOURCE_OPTIONS, STATUS_OPTIONS,
                      AccountingService, build_chart_data, build_dashboard_data, export_rows, inventory_stats)

accounting_bp = Blueprint('accounting', __name__, url_prefix='/finance')

service = AccountingService()

QUICK_ACTIONS = [
    ('Inventory Analytics', '/finance/analytics'),
    ('Inventory List', '/finance/inventory'),
]

PROFILE_FIELDS = [
    FormField('first_name', 'First Name', required=True),
    FormField('last_name', 'Last Name', required=True),
    FormField('username', 'Username'),
    FormField('phone', 'Contact Number', help='11 digits, e.g. 0951-341-9336'),
]

LIST_FILTERS = ('school', 'category', 'status', 'source')


@accounting_bp.route('')
@role_required('accounting')
def dashboard():
    """Finance landing page"""
    data = load_or_flash(service.get_dashboard_data, fallback=None)
    return render_template(
        'accounting/dashboard.html',
        data=data or build_dashboard_data({}, [], {}),
        load_failed=data is None,
        quick_actions=QUICK_ACTIONS,
    )


@accounting_bp.route('/analytics')
@role_required('accounting')
def analytics():
    charts = load_or_flash(service.get_analytics, fallback=None)
    return render_template('accounting/analytics.html', charts=charts or build_chart_data({}),
                           load_failed=charts is None)


@accounting_bp.route('/inventory')
@role_required('accounting')
def inventory():
    query = ListQuery.from_args(request.args, filters=LIST_FILTERS)
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None) or {
        'items': [], 'page': paginate([], 1, query.per_page), 'total': 0, 'stats': inventory_stats([]),
        'schools': [], 'categories': []}
    return render_template(
        'accounting/inventory.html',
        listing=listing,
        rows=export_rows(listing['page'].items, blank='-'),
        query=query,
        status_options=STATUS_OPTIONS,
        source_options=SOURCE_OPTIONS,
    )


def _export(builder):
    query = ListQuery.from_args(request.args, filters=LIST_FILTERS)
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None)
    if listing is None:
        return redirect(url_for('accounting.inventory', **query.to_args()))
    if not listing['items']:
        flash(NO_ITEMS_MESSAGE, 'warning')
        return redirect(url_for('accounting.inventory', **query.to_args()))
    return builder(listing['items'])


@accounting_bp.route('/inventory/export.csv')
@role_required('accounting')
def export_csv():
    return _export(lambda items: csv_response(service.export_csv(items), CSV_FILENAME))


@accounting_bp.route('/inventory/export.pdf')
@role_required('accounting')
def export_pdf():
    return _export(lambda items: pdf_response(service.export_pdf(items), PDF_FILENAME))


@accounting_bp.route('/profile', methods=['GET', 'POST'])
@role_required('accounting')
def profile():
    """Profile form; the password form posts here with form=password"""
    if request.method == 'POST' and request.form.get('form') == 'password':
        return handle_password_form(title='Change Password')
    return handle_profile_form(service.profile, PROFILE_FIELDS, 'My Profile', template='accounting/profile.html')
