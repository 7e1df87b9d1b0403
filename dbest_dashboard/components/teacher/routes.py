"""
Teacher Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...core.errors import ApiRequestError, AuthenticationError, FormValidationError
from ...core.exports import csv_response, pdf_response
from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import FormField, load_or_flash
from ..account_settings import handle_profile_form
from .service import (CSV_FILENAME, NO_ITEMS_MESSAGE, PDF_FILENAME, SOURCE_OPTIONS, STATUS_OPTIONS,
                      TeacherService, item_stats, pdf_rows)

teacher_bp = Blueprint('teacher', __name__, url_prefix='/faculty')

service = TeacherService()

PROFILE_FIELDS = [
    FormField('first_name', 'First Name', required=True),
    FormField('last_name', 'Last Name', required=True),
    FormField('email', 'Email', type='email'),
    FormField('department', 'Department'),
]

LIST_FILTERS = ('source', 'status')


@teacher_bp.route('', methods=['GET', 'POST'])
@role_required('teacher')
def dashboard():
    """Assigned items next to the editable personnel record"""
    errors = {}
    if request.method == 'POST':
        try:
            service.profile.update_profile(request.form)
        except FormValidationError as e:
            errors = e.errors
            flash(e.message, 'danger')
        except AuthenticationError:
            raise
        except ApiRequestError:
            flash('Failed to update personnel details', 'danger')
        else:
            flash('Personnel details updated successfully', 'success')
            return redirect(url_for('teacher.dashboard'))

    data = load_or_flash(service.get_dashboard_data, fallback=None)
    if data is None:
        data = {'assigned_items': [], 'personnel': {}}
    return render_template('teacher/dashboard.html', data=data, fields=PROFILE_FIELDS, errors=errors)


@teacher_bp.route('/assigned-items')
@role_required('teacher')
def my_items():
    query = ListQuery.from_args(request.args, filters=LIST_FILTERS, default_sort='assigned_at')
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None) or {
        'items': [], 'page': paginate([], 1, query.per_page), 'total': 0, 'stats': item_stats([])}
    return render_template(
        'teacher/my_items.html',
        listing=listing,
        rows=pdf_rows(listing['page'].items),
        query=query,
        status_options=STATUS_OPTIONS,
        source_options=SOURCE_OPTIONS,
    )


def _export(builder):
    query = ListQuery.from_args(request.args, filters=LIST_FILTERS, default_sort='assigned_at')
    listing = load_or_flash(lambda: service.get_listing(query), fallback=None)
    if listing is None:
        return redirect(url_for('teacher.my_items', **query.to_args()))
    if not listing['items']:
        flash(NO_ITEMS_MESSAGE, 'warning')
        return redirect(url_for('teacher.my_items', **query.to_args()))
    return builder(listing)


@teacher_bp.route('/assigned-items/export.csv')
@role_required('teacher')
def export_csv():
    return _export(lambda listing: csv_response(service.export_csv(listing['items']), CSV_FILENAME))


@teacher_bp.route('/assigned-items/export.pdf')
@role_required('teacher')
def export_pdf():
    return _export(lambda listing: pdf_response(
        service.export_pdf(listing['items'], listing['stats']), PDF_FILENAME))


@teacher_bp.route('/profile', methods=['GET', 'POST'])
@role_required('teacher')
def profile():
    return handle_profile_form(service.profile, PROFILE_FIELDS, 'My Profile')
