"""
Complaints Routes
Student complaint list and submission, staff triage for admins and wardens
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import humanize_status
from .service import ComplaintsService

logger = logging.getLogger(__name__)

STAFF_PREFIX = '/dashboard/<any(admin, warden):role>/complaints'

complaints_bp = Blueprint('complaints', __name__, template_folder='templates')

# Service instance
service = ComplaintsService()


def selected_complaint(role, complaints):
    """Complaint named by ?id=, taken from the list or fetched on its own"""
    complaint_id = request.args.get('id')
    if not complaint_id:
        return None
    for complaint in complaints:
        if complaint.get('_id') == complaint_id:
            return complaint
    try:
        return service.fetch_complaint(api_client(role), role, complaint_id)
    except ApiError as e:
        flash(str(e), 'error')
        return None


@complaints_bp.route('/dashboard/student/complaints')
@role_required('student')
def student_list():
    """Student's own complaints with the submission form"""
    complaints = []
    try:
        complaints = service.fetch_complaints(api_client('student'), 'student')
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'complaints/student.html',
        complaints=complaints,
        selected=selected_complaint('student', complaints),
        categories=current_app.config['COMPLAINT_CATEGORIES'],
    )


@complaints_bp.route('/dashboard/student/complaints', methods=['POST'])
@role_required('student')
def student_create():
    try:
        service.create_complaint(api_client('student'), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Your complaint has been submitted successfully', 'success')
    return redirect(url_for('complaints.student_list'))


@complaints_bp.route('/dashboard/student/complaints/<complaint_id>/comments', methods=['POST'])
@role_required('student')
def student_comment(complaint_id):
    try:
        service.add_comment(api_client('student'), 'student', complaint_id, request.form.get('text'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Comment added successfully', 'success')
    return redirect(url_for('complaints.student_list', id=complaint_id))


@complaints_bp.route(STAFF_PREFIX)
@role_required()
def staff_list(role):
    """All complaints with status/category filters and search"""
    status = request.args.get('status', 'all')
    category = request.args.get('category', 'all')
    search = request.args.get('q', '')

    complaints = []
    try:
        complaints = service.fetch_complaints(api_client(role), role)
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'complaints/staff.html',
        role=role,
        complaints=service.filter_complaints(complaints, status, category, search),
        counts=service.status_counts(complaints),
        selected=selected_complaint(role, complaints),
        status=status,
        category=category,
        search=search,
        categories=current_app.config['COMPLAINT_CATEGORIES'],
        statuses=current_app.config['COMPLAINT_STATUSES'],
    )


@complaints_bp.route(f'{STAFF_PREFIX}/<complaint_id>/status', methods=['POST'])
@role_required()
def staff_update_status(role, complaint_id):
    status = request.form.get('status', '')
    try:
        service.update_status(api_client(role), role, complaint_id, status)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"Status updated to {humanize_status(status)}", 'success')
    return redirect(url_for('complaints.staff_list', role=role, id=complaint_id))


@complaints_bp.route(f'{STAFF_PREFIX}/<complaint_id>/comments', methods=['POST'])
@role_required()
def staff_comment(role, complaint_id):
    try:
        service.add_comment(api_client(role), role, complaint_id, request.form.get('text'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Comment added successfully', 'success')
    return redirect(url_for('complaints.staff_list', role=role, id=complaint_id))


def init_complaints(app):
    """Initialize Complaints component with Flask app"""
    app.register_blueprint(complaints_bp)
    return complaints_bp
