"""
Authentication Routes
"""
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core import auth
from ...core.guards import public_only
from .service import AuthService

auth_bp = Blueprint('auth', __name__)

service = AuthService()


@auth_bp.route('/login', methods=['GET', 'POST'])
@public_only
def login():
    """Login page; a successful login lands on the role home route"""
    username = ''
    deactivation = None

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')
        result = service.login(username, password)
        if result.success:
            flash(service.welcome_message(result), 'success')
            return redirect(auth.get_role_home_route(result.user_type))

        current_app.logger.info(f'Failed login for {username or "<blank>"}: {result.error}')
        flash(result.error or 'Please check your credentials and try again.', 'danger')
        if result.deactivation:
            deactivation = service.deactivation_details(result.deactivation)

    return render_template('login.html', username=username, deactivation=deactivation)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    service.logout()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
