"""
Property Custodian Dashboard Routes
"""
from flask import Blueprint, render_template

from ...core.guards import role_required
from ...core.views import load_or_flash
from .service import CustodianDashboardService, build_dashboard_data

custodian_dashboard_bp = Blueprint('custodian_dashboard', __name__)

service = CustodianDashboardService()


@custodian_dashboard_bp.route('/custodian')
@role_required('property_custodian')
def dashboard():
    """Custodian landing page"""
    data = load_or_flash(service.get_dashboard_data, fallback=None)
    return render_template(
        'custodian/dashboard.html',
        data=data or build_dashboard_data([], [], []),
        load_failed=data is None,
        quick_actions=service.QUICK_ACTIONS,
    )
