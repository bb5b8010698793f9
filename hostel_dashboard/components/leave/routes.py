"""
Leave Routes
Student applications (create, edit while pending, delete) and staff review
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import STAFF_TABS, STUDENT_TABS, LeaveService

logger = logging.getLogger(__name__)

STAFF_PREFIX = '/dashboard/<any(admin, warden):role>/leave'

leave_bp = Blueprint('leave', __name__, template_folder='templates')

# Service instance
service = LeaveService()


def find(applications, leave_id):
    return next((app for app in applications if app.get('_id') == leave_id), None)


@leave_bp.route('/dashboard/student/leave')
@role_required('student')
def student_list():
    """Leave applications by tab, with the apply/edit form"""
    tab = request.args.get('tab', 'all')
    if tab not in STUDENT_TABS:
        tab = 'all'

    applications = []
    try:
        applications = service.fetch_applications(api_client('student'), 'student')
    except ApiError as e:
        flash(str(e), 'error')

    editing = find(applications, request.args.get('edit'))
    if editing is not None and editing.get('status') != 'pending':
        flash('Only pending leave applications can be edited', 'error')
        editing = None

    return render_template(
        'leave/student.html',
        applications=service.by_tab(applications, tab),
        tab=tab,
        tabs=STUDENT_TABS,
        editing=editing,
        leave_types=current_app.config['LEAVE_TYPES'],
        today=service.today().isoformat(),
    )


@leave_bp.route('/dashboard/student/leave', methods=['POST'])
@role_required('student')
def student_create():
    try:
        service.create_application(api_client('student'), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Leave application submitted successfully', 'success')
    return redirect(url_for('leave.student_list'))


@leave_bp.route('/dashboard/student/leave/<leave_id>/edit', methods=['POST'])
@role_required('student')
def student_edit(leave_id):
    client = api_client('student')
    try:
        application = find(service.fetch_applications(client, 'student'), leave_id)
        service.update_application(client, application, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return redirect(url_for('leave.student_list', edit=leave_id))

    flash('Leave application updated successfully', 'success')
    return redirect(url_for('leave.student_list'))


@leave_bp.route('/dashboard/student/leave/<leave_id>/delete', methods=['POST'])
@role_required('student')
def student_delete(leave_id):
    try:
        service.delete_application(api_client('student'), leave_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Leave application deleted successfully', 'success')
    return redirect(url_for('leave.student_list'))


@leave_bp.route(STAFF_PREFIX)
@role_required()
def staff_list(role):
    """Leave applications for review, filtered by tab, status and search"""
    tab = request.args.get('tab', 'pending')
    status = request.args.get('status', 'all')
    search = request.args.get('q', '')

    applications = []
    try:
        applications = service.fetch_applications(api_client(role), role)
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'leave/staff.html',
        role=role,
        applications=service.filter_staff(applications, tab, status, search),
        counts=service.counts(applications),
        selected=find(applications, request.args.get('id')),
        tab=tab,
        tabs=STAFF_TABS,
        status=status,
        search=search,
    )


@leave_bp.route(f'{STAFF_PREFIX}/<leave_id>/review', methods=['POST'])
@role_required()
def staff_review(role, leave_id):
    status = request.form.get('status', '')
    try:
        service.review_application(api_client(role), role, leave_id, status, request.form.get('remarks'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return redirect(url_for('leave.staff_list', role=role, id=leave_id))

    flash(f'Leave application {status}', 'success')
    return redirect(url_for('leave.staff_list', role=role))


def init_leave(app):
    """Initialize Leave component with Flask app"""
    app.register_blueprint(leave_bp)
    return leave_bp
