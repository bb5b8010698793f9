"""
Student Management Service
Student records for admins and wardens: search and filters, add / edit /
remove, and each student's fee history.
"""
import logging

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.forms import choice, form_text
from ...core.formatting import newest_first
from .. import register_component

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'email', 'phone', 'course', 'address')


@register_component('students', pages={
    'admin': ('Students', 'students.students'),
    'warden': ('Students', 'students.students'),
})
class StudentsService:
    """Service for the Student Management component"""

    def fetch_students(self, client):
        payload = client.get('/api/admin/students', default_error='Failed to load student data')
        return unwrap_list(payload, 'students')

    @staticmethod
    def filter_students(students, search='', status='all', year='all'):
        """Search name, student id and course; exact status and year filters"""
        term = (search or '').strip().lower()
        filtered = []
        for student in students:
            haystack = [str(student.get(field) or '').lower() for field in ('name', 'studentId', 'course')]
            if term and not any(term in value for value in haystack):
                continue
            if status and status != 'all' and student.get('status') != status:
                continue
            if year and year != 'all' and student.get('year') != year:
                continue
            filtered.append(student)
        return filtered

    def validate_student(self, form, creating=True):
        """Student body from the form; the password is only required for new students"""
        body = {field: form_text(form, field) for field in REQUIRED_FIELDS}
        if not all(body.values()):
            raise ValidationError("Please fill in all required fields")
        if '@' not in body['email']:
            raise ValidationError("Please enter a valid email address")

        config = current_app.config
        body['year'] = choice(form, 'year', config['STUDENT_YEARS'], 'year')
        body['status'] = choice(form, 'status', config['STUDENT_STATUSES'], 'status', 'Active')

        password = form.get('password') or ''
        if creating and not password:
            raise ValidationError("Password is required for new students")
        if password:
            body['password'] = password
        return body

    def create_student(self, client, form):
        """Add a student; returns the backend's student record"""
        body = self.validate_student(form, creating=True)
        response = client.post('/api/admin/students', json=body, default_error='Error adding student')
        check_success(response, 'Error adding student')
        data = unwrap_data(response) or {}
        student = data.get('student', data) if isinstance(data, dict) else {}
        logger.info(f"Student added with id {student.get('studentId')}")
        return student

    def update_student(self, client, student_id, form):
        body = self.validate_student(form, creating=False)
        response = client.put(f'/api/admin/students/{student_id}', json=body,
                              default_error='Error updating student')
        check_success(response, 'Error updating student')
        logger.info(f"Student {student_id} updated")
        return unwrap_data(response)

    def delete_student(self, client, student_id):
        response = client.delete(f'/api/admin/students/{student_id}', default_error='Error deleting student')
        check_success(response, 'Error deleting student')
        logger.info(f"Student {student_id} deleted")

    def fetch_fee_history(self, client, student_id):
        payload = client.get(f'/api/admin/students/{student_id}/fees', default_error='Failed to load fee history')
        return newest_first(unwrap_list(payload, 'fees'), field='date')
