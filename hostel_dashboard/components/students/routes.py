"""
Student Management Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import StudentsService

logger = logging.getLogger(__name__)

students_bp = Blueprint(
    'students',
    __name__,
    template_folder='templates',
    url_prefix='/dashboard/<any(admin, warden):role>/students'
)

# Service instance
service = StudentsService()


def back(role, **args):
    return redirect(url_for('students.students', role=role, **args))


@students_bp.route('')
@role_required()
def students(role):
    """Student table with filters; ?edit=<id> opens the form, ?fees=<id> the fee history"""
    search = request.args.get('q', '')
    status = request.args.get('status', 'all')
    year = request.args.get('year', 'all')

    client = api_client(role)
    records = []
    try:
        records = service.fetch_students(client)
    except ApiError as e:
        flash(str(e), 'error')

    fees_for = next((s for s in records if s.get('_id') == request.args.get('fees')), None)
    fee_history = []
    if fees_for:
        try:
            fee_history = service.fetch_fee_history(client, fees_for['_id'])
        except ApiError as e:
            flash(str(e), 'error')

    config = current_app.config
    return render_template(
        'students/students.html',
        role=role,
        students=service.filter_students(records, search, status, year),
        editing=next((s for s in records if s.get('_id') == request.args.get('edit')), None),
        fees_for=fees_for,
        fee_history=fee_history,
        search=search,
        status=status,
        year=year,
        statuses=config['STUDENT_STATUSES'],
        years=config['STUDENT_YEARS'],
    )


@students_bp.route('', methods=['POST'])
@role_required()
def create(role):
    try:
        student = service.create_student(api_client(role), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"{student.get('name', 'Student')} has been added with ID: {student.get('studentId', 'N/A')}",
              'success')
    return back(role)


@students_bp.route('/<student_id>', methods=['POST'])
@role_required()
def update(role, student_id):
    try:
        service.update_student(api_client(role), student_id, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(role, edit=student_id)

    flash('Student details have been updated', 'success')
    return back(role)


@students_bp.route('/<student_id>/delete', methods=['POST'])
@role_required()
def delete(role, student_id):
    try:
        service.delete_student(api_client(role), student_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Student has been removed', 'success')
    return back(role)


def init_students(app):
    """Initialize Student Management component with Flask app"""
    app.register_blueprint(students_bp)
    return students_bp
