"""
Backups Routes
"""
import io

from flask import Blueprint, redirect, render_template, request, send_file, url_for

from ...core.guards import role_required
from ...core.listing import ListQuery, paginate
from ...core.views import load_or_flash, run_action
from .service import EMPTY_INFO, BackupService, backup_stats

backups_bp = Blueprint('backups', __name__, url_prefix='/backups')

service = BackupService()


@backups_bp.route('')
@role_required('ict')
def backups():
    """Backup overview with a paginated file list"""
    query = ListQuery.from_args(request.args)
    info = load_or_flash(service.get_info, fallback=None) or dict(EMPTY_INFO)
    page = paginate(info['backups'], query.page, query.per_page)
    return render_template('ict/backups.html', info=info, stats=backup_stats(info), page=page, query=query)


@backups_bp.route('/create', methods=['POST'])
@role_required('ict')
def create_backup():
    backup_type = request.form.get('type') or 'database'
    return run_action(lambda: service.create(backup_type), 'Backup created successfully!',
                      url_for('backups.backups'))


@backups_bp.route('/<filename>/download')
@role_required('ict')
def download_backup(filename):
    result = load_or_flash(lambda: service.download(filename), fallback=None)
    if result is None:
        return redirect(url_for('backups.backups'))
    content, name, content_type = result
    return send_file(
        io.BytesIO(content),
        mimetype=content_type,
        as_attachment=True,
        download_name=name,
    )


@backups_bp.route('/<filename>/delete', methods=['POST'])
@role_required('ict')
def delete_backup(filename):
    return run_action(lambda: service.delete(filename), 'Backup deleted successfully!',
                      url_for('backups.backups'))
