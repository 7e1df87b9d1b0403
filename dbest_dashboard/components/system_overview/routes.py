"""
System Overview Routes
"""
from flask import Blueprint, jsonify, render_template

from ...core.guards import api_role_required, role_required
from .service import SystemOverviewService

system_overview_bp = Blueprint('system_overview', __name__)

service = SystemOverviewService()


@system_overview_bp.route('/api/system/metrics')
@api_role_required('ict')
def api_system_metrics():
    """Backend request counters gathered by the API client"""
    metrics = service.get_system_metrics()
    return jsonify({
        'total_requests': metrics['total_requests'],
        'total_errors': metrics['total_errors'],
        'error_rate': metrics['error_rate'],
        'resources': metrics['resources'],
        'logs_count': metrics['logs_count'],
    })


@system_overview_bp.route('/health')
def health():
    """Public liveness check; 503 while the backend is unreachable"""
    health = service.get_health()
    return jsonify(health), 503 if health['backend'] == 'down' else 200


@system_overview_bp.route('/system')
@role_required('ict')
def overview():
    return render_template('ict/system_overview.html', metrics=service.get_system_metrics(),
                           health=service.get_health())
