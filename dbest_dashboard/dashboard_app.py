"""
DBEST Inventory Dashboard
Flask front end for the school property inventory REST API
"""
import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config.settings import DashboardConfig
from .core import auth
from .core.errors import ApiRequestError, AuthenticationError
from .core.formatting import register_filters
from .core.logs import configure_logging
from .components import registry
from .routes.main_routes import main_bp

# Component packages register themselves with the registry on import
from .components import (  # noqa: F401
    auth as auth_component,
    custodian_dashboard,
    inventory,
    personnel,
    inventory_reports,
    school_profile,
    account_settings,
    teacher,
    ict_dashboard,
    backups,
    account_management,
    accounting,
    dcp_packages,
    system_logs,
    system_overview,
)

logger = logging.getLogger(__name__)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    @app.errorhandler(AuthenticationError)
    def handle_authentication_error(error):
        auth.clear_session()
        if _wants_json():
            return jsonify({'error': error.message}), 401
        flash(error.message, 'warning')
        return redirect(url_for('auth.login'))

    @app.errorhandler(ApiRequestError)
    def handle_api_error(error):
        logger.error(f'Unhandled backend error on {request.path}: {error.message}')
        if _wants_json():
            return jsonify({'error': error.message}), error.status_code or 502
        if not auth.is_authenticated():
            flash(error.message, 'danger')
            return redirect(url_for('auth.login'))
        home = auth.get_role_home_route(auth.current_user_type())
        if request.path == home:
            return render_template('error.html', message=error.message), 502
        flash(error.message, 'danger')
        return redirect(home)

    @app.errorhandler(404)
    def handle_not_found(error):
        if _wants_json():
            return jsonify({'error': 'Not found'}), 404
        home = auth.get_role_home_route(auth.current_user_type()) if auth.is_authenticated() else url_for('auth.login')
        return render_template('not_found.html', home_url=home), 404


class DashboardApp:
    """Main dashboard application class"""

    def __init__(self, config=DashboardConfig):
        self.config = config
        self.app = None

    def create_app(self):
        """Create and configure Flask application"""
        self.app = Flask(__name__)

        # Load configuration
        self.app.config.from_object(self.config)

        configure_logging(logging.DEBUG if self.app.debug else logging.INFO)

        # Initialize extensions
        limiter = Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI'],
        )
        self.app.extensions['dbest_limiter'] = limiter

        register_filters(self.app)

        # Initialize components
        registry.init_all(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        register_error_handlers(self.app)

        logger.info(f"Dashboard configured for API {self.app.config['API_BASE_URL']}")
        return self.app

    def run(self):
        """Start the dashboard application"""
        host = self.app.config['HOST']
        port = self.app.config['PORT']

        logger.info('DBEST dashboard started')
        logger.info(f'Starting on: http://{host}:{port}')
        logger.info(f"Backend API: {self.app.config['API_BASE_URL']}")

        self.app.run(host=host, port=port, debug=False)


def create_app(config=DashboardConfig):
    return DashboardApp(config).create_app()


def main():
    """Main entry point"""
    dashboard = DashboardApp()
    dashboard.create_app()
    dashboard.run()


if __name__ == '__main__':
    main()
