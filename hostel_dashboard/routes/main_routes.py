"""
Main page routes for dashboard

Landing page, health check and the three role home pages. Home pages pull
from several backend sources; each section degrades to empty when its
source fails.
"""
import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, redirect, render_template, url_for

from ..core.api_client import unwrap_list
from ..core.auth import api_client, current_user, get_token, role_required
from ..core.exceptions import ApiError
from ..core.formatting import format_long_date, newest_first
from ..components.attendance.routes import service as attendance_service
from ..components.complaints.routes import service as complaints_service
from ..components.leave.routes import service as leave_service
from ..components.mess_menu.routes import service as mess_menu_service
from ..components.notices.routes import service as notices_service
from ..components.rooms.routes import service as rooms_service

logger = logging.getLogger(__name__)

# Create main blueprint
main_bp = Blueprint('main', __name__)


def _section(label, fetch, default):
    """Run one home page fetch; an ApiError leaves the section empty"""
    try:
        return fetch()
    except ApiError as e:
        logger.warning(f"Home page section '{label}' unavailable: {e}")
        return default


def _count(records, status='pending'):
    return sum(1 for record in records if record.get('status') == status)


@main_bp.route('/')
def index():
    """Send a logged-in browser to its dashboard, otherwise show role choice"""
    for role, role_config in current_app.config['ROLES'].items():
        if get_token(role):
            return redirect(url_for(role_config['home']))
    return render_template('index.html', roles=current_app.config['ROLES'])


@main_bp.route('/health')
def health():
    return jsonify({
        'status': 'healthy',
        'service': 'hostel-dashboard',
        'timestamp': datetime.now().isoformat(),
    })


@main_bp.route('/dashboard/student')
@role_required('student')
def student_home():
    """Room, pending counts, urgent notices and today's menu"""
    client = api_client('student')

    student, room = _section('room', lambda: rooms_service.fetch_room_info(client), (None, None))
    complaints = _section('complaints', lambda: complaints_service.fetch_complaints(client, 'student'), [])
    leaves = _section('leave', lambda: leave_service.fetch_applications(client, 'student'), [])
    notices = _section('notices', lambda: notices_service.fetch_notices(client), [])
    menu = _section('menu', lambda: mess_menu_service.fetch_menu(client), [])

    return render_template(
        'home/student.html',
        user=student or current_user('student'),
        room=room,
        pending_complaints=_count(complaints),
        pending_leaves=_count(leaves),
        recent_complaints=complaints[:2],
        recent_leaves=leaves[:2],
        urgent_notices=notices_service.urgent_notices(notices),
        today_item=mess_menu_service.todays_menu(menu),
        today_label=format_long_date(mess_menu_service.today()),
    )


def pending_items(client):
    """Pending leave and complaints merged, newest first"""
    leaves = _section(
        'pending leave',
        lambda: unwrap_list(client.get('/api/admin/leave', params={'status': 'pending'}), 'leaves'),
        [],
    )
    complaints = _section(
        'pending complaints',
        lambda: unwrap_list(client.get('/api/admin/complaints', params={'status': 'pending'}), 'complaints'),
        [],
    )

    items = []
    for leave in leaves:
        student = leave.get('student') if isinstance(leave.get('student'), dict) else {}
        items.append({
            'type': 'leave',
            'id': leave.get('_id'),
            'title': f"{(leave.get('leaveType') or 'Leave').capitalize()} leave request",
            'who': student.get('name') or 'Unknown',
            'createdAt': leave.get('createdAt'),
            'url': url_for('leave.staff_list', role='admin', id=leave.get('_id')),
        })
    for complaint in complaints:
        submitter = complaint.get('submittedBy') if isinstance(complaint.get('submittedBy'), dict) else {}
        items.append({
            'type': 'complaint',
            'id': complaint.get('_id'),
            'title': complaint.get('title') or 'Complaint',
            'who': submitter.get('name') or submitter.get('email') or 'Unknown',
            'createdAt': complaint.get('createdAt'),
            'url': url_for('complaints.staff_list', role='admin', id=complaint.get('_id')),
        })
    return newest_first(items)


@main_bp.route('/dashboard/admin')
@role_required('admin')
def admin_home():
    items = pending_items(api_client('admin'))
    return render_template('home/admin.html', items=items, user=current_user('admin'))


@main_bp.route('/dashboard/warden')
@role_required('warden')
def warden_home():
    """Pending leave and complaint counts plus today's attendance"""
    client = api_client('warden')
    leaves = _section('leave', lambda: leave_service.fetch_applications(client, 'warden'), [])
    complaints = _section('complaints', lambda: complaints_service.fetch_complaints(client, 'warden'), [])
    records = _section('attendance', lambda: attendance_service.todays_records(client, 'warden'), [])

    return render_template(
        'home/warden.html',
        user=current_user('warden'),
        pending_leaves=_count(leaves),
        pending_complaints=_count(complaints),
        attendance=attendance_service.record_summary(records),
        today_label=format_long_date(attendance_service.today()),
    )
