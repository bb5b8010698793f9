"""
System Logs Routes
"""
from flask import Blueprint, jsonify, render_template, request

from ...core.auth import get_token, role_required
from .service import LEVELS, SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__, template_folder='templates')

# Service instance
service = SystemLogsService()


@system_logs_bp.route('/api/logs')
def api_logs():
    """Recent dashboard log entries as JSON (admin only)

    Query parameters: level (ALL, INFO, ...) and limit.
    """
    if not get_token('admin'):
        return jsonify({'error': 'Admin login required'}), 401

    level_filter = request.args.get('level', 'ALL').upper()
    limit = service.parse_limit(request.args.get('limit', 50))
    return jsonify(service.get_logs(level_filter=level_filter, limit=limit))


@system_logs_bp.route('/dashboard/admin/logs')
@role_required('admin')
def logs_page():
    level_filter = request.args.get('level', 'ALL').upper()
    limit = service.parse_limit(request.args.get('limit', 100))
    return render_template(
        'system_logs/logs.html',
        logs=list(reversed(service.get_logs(level_filter=level_filter, limit=limit))),
        level=level_filter,
        levels=LEVELS,
    )


def init_system_logs(app):
    """Initialize System Logs component with Flask app"""
    app.register_blueprint(system_logs_bp)
    return system_logs_bp
