"""
ICT Dashboard Routes
"""
from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...core.guards import role_required
from ...core.views import load_or_flash, run_action
from .service import BACKUP_TYPES, IctDashboardService, backup_status_color

ict_dashboard_bp = Blueprint('ict_dashboard', __name__, url_prefix='/dashboard')

service = IctDashboardService()


@ict_dashboard_bp.route('')
@role_required('ict')
def dashboard():
    """ICT landing page: settings, backups and custodians tabs"""
    data = load_or_flash(service.get_dashboard_data, fallback=None)
    return render_template(
        'ict/dashboard.html',
        data=data or {'settings': [], 'backups': [], 'property_custodians': []},
        load_failed=data is None,
        backup_types=BACKUP_TYPES,
        status_color=backup_status_color,
        tab=request.args.get('tab', 'settings'),
    )


@ict_dashboard_bp.route('/backups', methods=['POST'])
@role_required('ict')
def create_backup():
    backup_type = request.form.get('type', '')
    if backup_type not in dict(BACKUP_TYPES):
        flash('Select a backup type', 'danger')
        return redirect(url_for('ict_dashboard.dashboard', tab='backups'))
    return run_action(lambda: service.create_backup(backup_type, request.form.get('notes', '').strip()),
                      'Backup created successfully', url_for('ict_dashboard.dashboard', tab='backups'))


@ict_dashboard_bp.route('/backups/<backup_id>/restore', methods=['POST'])
@role_required('ict')
def restore_backup(backup_id):
    return run_action(lambda: service.restore_backup(backup_id), 'Backup restored successfully',
                      url_for('ict_dashboard.dashboard', tab='backups'))
