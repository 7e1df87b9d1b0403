"""
Account Settings Routes
/profile for every signed-in role, /settings for ICT and accounting
"""
from flask import Blueprint, flash, redirect, render_template, request

from ...core import auth
from ...core.errors import ApiRequestError, AuthenticationError, FormValidationError
from ...core.guards import login_required, role_required
from ...core.views import FormField, load_or_flash
from .service import PasswordService, SystemSettingsService

account_settings_bp = Blueprint('account_settings', __name__)

password_service = PasswordService()
settings_service = SystemSettingsService()

PASSWORD_FORM = [
    FormField('current_password', 'Current Password', type='password', required=True),
    FormField('new_password', 'New Password', type='password', required=True, help='At least 8 characters'),
    FormField('new_password_confirmation', 'Confirm New Password', type='password', required=True),
]


def handle_password_form(template='form.html', title='Change Password', **context):
    """Shared change-password flow; the API prefix follows the signed-in role"""
    errors = {}
    if request.method == 'POST':
        try:
            password_service.change_password(auth.current_user_type(), request.form)
        except FormValidationError as e:
            errors = e.errors
            flash(e.message, 'danger')
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            flash(e.message, 'danger')
        else:
            flash('Password changed successfully', 'success')
            return redirect(request.path)
    return render_template(template, title=title, fields=PASSWORD_FORM, values={}, errors=errors, form_name='password',
                           cancel_url=auth.get_role_home_route(auth.current_user_type()), **context)


def handle_profile_form(profile_service, fields, title, template='form.html', **context):
    """Shared own-profile flow: GET loads the record, POST updates it"""
    errors = {}
    values = load_or_flash(profile_service.get_profile, fallback={}) or {}
    if request.method == 'POST':
        values = {**values, **request.form.to_dict()}
        try:
            profile_service.update_profile(request.form)
        except FormValidationError as e:
            errors = e.errors
            flash(e.message, 'danger')
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            flash(e.message, 'danger')
        else:
            auth.refresh_user()
            flash('Profile updated successfully!', 'success')
            return redirect(request.path)
    return render_template(template, title=title, fields=fields, values=values, errors=errors,
                           cancel_url=auth.get_role_home_route(auth.current_user_type()), **context)


@account_settings_bp.route('/profile')
@login_required
def profile():
    """Signed-in user's account details"""
    user = auth.refresh_user() or auth.current_user()
    return render_template('account/profile.html', user=user)


@account_settings_bp.route('/settings', methods=['GET', 'POST'])
@role_required('ict', 'accounting')
def settings():
    system_settings = None
    if auth.is_ict() and request.method == 'GET':
        system_settings = load_or_flash(settings_service.get_settings, fallback=None)
    return handle_password_form(template='account/settings.html', title='Account Settings',
                                system_settings=system_settings)
