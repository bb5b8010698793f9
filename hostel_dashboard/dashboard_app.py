"""
Hostel Management Dashboard
Flask front end for students, admins and wardens over the hostel REST API
"""
import logging
import os

import requests
from flask import Flask, g, url_for

from .config.settings import DashboardConfig
from .core import system_logs
from .core.auth import handle_unauthorized
from .core.exceptions import UnauthorizedError
from .core.extensions import limiter
from .core.formatting import register_template_filters
from .core.log_buffer import install_log_buffer
from .routes.main_routes import main_bp

from .components import registry
from .components.attendance import init_attendance
from .components.auth import init_auth
from .components.complaints import init_complaints
from .components.fees import init_fees
from .components.leave import init_leave
from .components.mess_menu import init_mess_menu
from .components.notices import init_notices
from .components.room_management import init_room_management
from .components.rooms import init_rooms
from .components.students import init_students
from .components.system_logs import init_system_logs
from .components.wardens import init_wardens

logger = logging.getLogger(__name__)


def _endpoint_takes_role(app, endpoint):
    return any('role' in rule.arguments for rule in app.url_map.iter_rules(endpoint))


class DashboardApp:
    """Main dashboard application class"""

    def __init__(self, host='0.0.0.0', port=8081, debug=False):
        self.app = None
        self.host = host
        self.port = port
        self.debug = debug

    def create_app(self, config=None, http_session=None):
        """Create and configure Flask application

        `config` overrides DashboardConfig keys; `http_session` replaces the
        requests session used for backend calls.
        """
        self.app = Flask(__name__)

        # Load configuration
        self.app.config.from_object(DashboardConfig)
        if config:
            self.app.config.update(config)
        # One pooled backend session for the whole app
        if http_session is None:
            http_session = requests.Session()
        self.app.extensions['hostel_api_session'] = http_session

        # Logging: console plus the in-memory buffer served by system logs
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
        install_log_buffer(system_logs)

        # Initialize extensions
        limiter.init_app(self.app)
        register_template_filters(self.app)
        self.app.register_error_handler(UnauthorizedError, handle_unauthorized)
        self.app.context_processor(self._navigation)

        # Initialize components
        init_auth(self.app)
        init_attendance(self.app)
        init_complaints(self.app)
        init_leave(self.app)
        init_mess_menu(self.app)
        init_notices(self.app)
        init_rooms(self.app)
        init_room_management(self.app)
        init_students(self.app)
        init_wardens(self.app)
        init_fees(self.app)
        init_system_logs(self.app)

        # Register main blueprint
        self.app.register_blueprint(main_bp)

        logger.info(f"Dashboard created for backend {self.app.config['API_BASE_URL']}")
        return self.app

    def _navigation(self):
        """Sidebar links for the role of the current page"""
        role = g.get('role')
        if not role:
            return {}

        role_config = self.app.config['ROLES'][role]
        links = [('Dashboard', url_for(role_config['home']))]
        for title, endpoint in registry.navigation_for(role):
            if _endpoint_takes_role(self.app, endpoint):
                links.append((title, url_for(endpoint, role=role)))
            else:
                links.append((title, url_for(endpoint)))

        return {
            'nav_links': links,
            'nav_title': f"{role_config['title']} Portal",
            'nav_role': role,
        }

    def run(self):
        """Start the dashboard application"""
        logger.info('Hostel dashboard started')

        print("Hostel Management Dashboard")
        print(f"Starting on: http://localhost:{self.port}")
        print("Links:")
        print(f"   - Student login: http://localhost:{self.port}/login/student")
        print(f"   - Admin login:   http://localhost:{self.port}/login/admin")
        print(f"   - Warden login:  http://localhost:{self.port}/login/warden")
        print(f"   - Backend API:   {self.app.config['API_BASE_URL']}")

        self.app.run(host=self.host, port=self.port, debug=self.debug)


def create_app(config=None, http_session=None):
    """Application factory for WSGI servers and tests"""
    return DashboardApp().create_app(config=config, http_session=http_session)


def main():
    """Main entry point"""
    dashboard = DashboardApp(
        port=int(os.environ.get('DASHBOARD_PORT', 8081)),
        debug=os.environ.get('FLASK_DEBUG', '').lower() == 'true',
    )
    dashboard.create_app()
    dashboard.run()


if __name__ == '__main__':
    main()
