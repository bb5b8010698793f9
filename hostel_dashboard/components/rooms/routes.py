"""
Rooms Routes
"""
import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import ALLOCATION_FILTERS, ROOM_RULES, RoomsService

logger = logging.getLogger(__name__)

rooms_bp = Blueprint('rooms', __name__, template_folder='templates')

# Service instance
service = RoomsService()


@rooms_bp.route('/dashboard/student/room')
@role_required('student')
def student_room():
    """Room details and roommates of the logged-in student"""
    student, room = None, None
    try:
        student, room = service.fetch_room_info(api_client('student'))
    except ApiError as e:
        flash(str(e), 'error')
    return render_template('rooms/student.html', student=student, room=room, rules=ROOM_RULES)


@rooms_bp.route('/dashboard/admin/room-allocation')
@role_required('admin')
def allocation():
    """Students with allocation filters; ?student=<id> lists rooms they fit"""
    search = request.args.get('q', '')
    status = request.args.get('status', 'All')
    if status not in ALLOCATION_FILTERS:
        status = 'All'

    client = api_client('admin')
    students, rooms = [], []
    try:
        students = service.fetch_students(client)
        rooms = service.fetch_rooms(client)
    except ApiError as e:
        flash(str(e), 'error')

    selected = next((s for s in students if s.get('_id') == request.args.get('student')), None)
    return render_template(
        'rooms/allocation.html',
        students=service.filter_students(students, search, status),
        rooms=rooms,
        selected=selected,
        available=service.available_rooms(rooms, selected),
        search=search,
        status=status,
        filters=ALLOCATION_FILTERS,
    )


@rooms_bp.route('/dashboard/admin/room-allocation/allocate', methods=['POST'])
@role_required('admin')
def allocate():
    student_id = request.form.get('studentId')
    try:
        service.allocate(api_client('admin'), student_id, request.form.get('roomId'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return redirect(url_for('rooms.allocation', student=student_id))

    flash('Room allocated successfully', 'success')
    return redirect(url_for('rooms.allocation'))


@rooms_bp.route('/dashboard/admin/room-allocation/deallocate', methods=['POST'])
@role_required('admin')
def deallocate():
    try:
        count = service.deallocate(api_client('admin'), request.form.getlist('studentId'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"{count} student{'s' if count != 1 else ''} deallocated from rooms", 'success')
    return redirect(url_for('rooms.allocation'))


def init_rooms(app):
    """Initialize Rooms component with Flask app"""
    app.register_blueprint(rooms_bp)
    return rooms_bp
