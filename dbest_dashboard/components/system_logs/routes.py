"""
System Logs Routes
"""
from flask import Blueprint, jsonify, render_template, request

from ...config.settings import DashboardConfig
from ...core.guards import api_role_required, role_required
from .service import LOG_LEVELS, SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__)

service = SystemLogsService()


def _limit():
    try:
        return max(1, int(request.args.get('limit', DashboardConfig.DEFAULT_LOG_LIMIT)))
    except ValueError:
        return DashboardConfig.DEFAULT_LOG_LIMIT


@system_logs_bp.route('/api/logs')
@api_role_required('ict')
def api_logs():
    """Newest dashboard log entries as JSON"""
    logs = service.get_logs(level_filter=request.args.get('level', 'ALL'), limit=_limit())
    return jsonify(logs)


@system_logs_bp.route('/system/logs')
@role_required('ict')
def logs_page():
    level = request.args.get('level', 'ALL').upper()
    logs = service.get_logs(level_filter=level, limit=_limit())
    return render_template('ict/system_logs.html', logs=list(reversed(logs)), level=level, levels=LOG_LEVELS)
