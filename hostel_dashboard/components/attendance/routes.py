"""
Attendance Routes
Marking page, session switch, per-student toggle, batch submit and history
for the admin and warden dashboards.
"""
import logging

from flask import Blueprint, flash, redirect, render_template, request, session, url_for

from ...core import attendance_drafts
from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import format_long_date
from .service import DRAFT_NAME, SESSIONS, AttendanceService

logger = logging.getLogger(__name__)

attendance_bp = Blueprint(
    'attendance',
    __name__,
    template_folder='templates',
    url_prefix='/dashboard/<any(admin, warden):role>/attendance'
)

# Service instance
service = AttendanceService()


def draft_id():
    """Per-browser key into the attendance draft store"""
    if 'draft_id' not in session:
        session['draft_id'] = attendance_drafts.new_id()
    return session['draft_id']


def load_state(role):
    """Today's draft for this browser, loading it from the backend if needed"""
    state = service.get_session(attendance_drafts, draft_id(), role)
    if state is None:
        state = service.new_session(role)
        state.load(api_client(role))
        service.save_session(attendance_drafts, draft_id(), state)
    return state


def back(role):
    return redirect(url_for('attendance.page', role=role))


@attendance_bp.route('')
@role_required()
def page(role):
    """Attendance marking page, or the history table when history is shown"""
    if request.args.get('refresh'):
        attendance_drafts.discard(draft_id(), DRAFT_NAME.format(role=role))
    try:
        state = load_state(role)
    except ApiError as e:
        flash(str(e), 'error')
        state = service.new_session(role)

    return render_template(
        'attendance/attendance.html',
        role=role,
        state=state,
        sessions=SESSIONS,
        today_label=format_long_date(state.current_date),
    )


@attendance_bp.route('/session', methods=['POST'])
@role_required()
def set_session(role):
    """Switch between morning and evening marking"""
    try:
        state = load_state(role)
        state.set_session(request.form.get('session', ''))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    return back(role)


@attendance_bp.route('/toggle/<student_id>', methods=['POST'])
@role_required()
def toggle(role, student_id):
    """Flip one student's mark for the active session"""
    try:
        state = load_state(role)
        state.toggle(student_id)
    except ApiError as e:
        flash(str(e), 'error')
    return back(role)


@attendance_bp.route('/submit', methods=['POST'])
@role_required()
def submit(role):
    """Submit the active session's marks as one batch"""
    try:
        state = load_state(role)
        state.submit(api_client(role))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(role)

    flash(f"Attendance has been successfully marked for {state.session} session "
          f"on {format_long_date(state.current_date)}.", 'success')
    return back(role)


@attendance_bp.route('/history', methods=['POST'])
@role_required()
def toggle_history(role):
    """Show or hide the history table"""
    try:
        state = load_state(role)
        state.toggle_history(api_client(role))
    except ApiError as e:
        flash(str(e), 'error')
    return back(role)


@attendance_bp.route('/history/date', methods=['POST'])
@role_required()
def select_date(role):
    """Load history records for the chosen date"""
    try:
        state = load_state(role)
        state.select_date(api_client(role), request.form.get('date', ''))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    return back(role)


def init_attendance(app):
    """Initialize Attendance component with Flask app"""
    app.register_blueprint(attendance_bp)
    return attendance_bp
