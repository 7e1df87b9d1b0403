"""
Main page routes for dashboard
"""
from flask import Blueprint, redirect, render_template, request, url_for

from ..config.settings import DashboardConfig
from ..core import auth
from ..core.navigation import build_sidebar, is_sidebar_collapsed, toggle_sidebar

# Create main blueprint
main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Role home for a signed-in user, login page otherwise"""
    if auth.is_authenticated():
        return redirect(auth.get_role_home_route(auth.current_user_type()))
    return redirect(url_for('auth.login'))


@main_bp.route('/unauthorized')
def unauthorized():
    home = auth.get_role_home_route(auth.current_user_type()) if auth.is_authenticated() else url_for('auth.login')
    return render_template('unauthorized.html', home_url=home), 403


@main_bp.route('/sidebar/toggle', methods=['POST'])
def sidebar_toggle():
    toggle_sidebar()
    return redirect(request.referrer or url_for('main.index'))


@main_bp.app_context_processor
def inject_layout():
    """Sidebar and user details for the shared layout"""
    if not auth.is_authenticated():
        return {'sidebar': [], 'sidebar_collapsed': False, 'current_user': {}, 'role_label': ''}
    user_type = auth.current_user_type()
    return {
        'sidebar': build_sidebar(user_type, request.path, request.args),
        'sidebar_collapsed': is_sidebar_collapsed(),
        'current_user': auth.current_user(),
        'role_label': DashboardConfig.get_role_config(user_type).get('label', ''),
    }
