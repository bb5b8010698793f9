"""
Complaints Service
Student submissions and staff triage of hostel complaints
"""
import logging

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.formatting import newest_first
from .. import register_component

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 'medium'


def _matches(complaint, term):
    submitter = complaint.get('submittedBy') or {}
    fields = [
        complaint.get('title'),
        complaint.get('description'),
        submitter.get('email') if isinstance(submitter, dict) else None,
        complaint.get('roomNumber'),
        submitter.get('studentId') if isinstance(submitter, dict) else None,
    ]
    return any(term in str(value).lower() for value in fields if value)


@register_component('complaints', pages={
    'student': ('Complaints', 'complaints.student_list'),
    'admin': ('Complaints', 'complaints.staff_list'),
    'warden': ('Complaints', 'complaints.staff_list'),
})
class ComplaintsService:
    """Service for the Complaints component"""

    def list_path(self, role):
        return f'/api/{role}/complaints'

    def fetch_complaints(self, client, role):
        payload = client.get(self.list_path(role), default_error='Failed to fetch complaints')
        return newest_first(unwrap_list(payload, 'complaints'))

    def fetch_complaint(self, client, role, complaint_id):
        payload = client.get(f'{self.list_path(role)}/{complaint_id}',
                             default_error='Failed to fetch complaint details')
        return unwrap_data(payload)

    def filter_complaints(self, complaints, status='all', category='all', search=''):
        """Apply the staff list filters; search is case-insensitive"""
        filtered = list(complaints)
        if status and status != 'all':
            filtered = [c for c in filtered if c.get('status') == status]
        if category and category != 'all':
            filtered = [c for c in filtered if c.get('category') == category]
        term = (search or '').strip().lower()
        if term:
            filtered = [c for c in filtered if _matches(c, term)]
        return filtered

    def status_counts(self, complaints):
        counts = {status: 0 for status in current_app.config['COMPLAINT_STATUSES']}
        for complaint in complaints:
            status = complaint.get('status')
            if status in counts:
                counts[status] += 1
        counts['total'] = len(complaints)
        return counts

    def validate_complaint(self, form):
        for field in ('title', 'description', 'roomNumber'):
            if not (form.get(field) or '').strip():
                raise ValidationError("Please fill in all required fields")
        category = form.get('category') or current_app.config['COMPLAINT_CATEGORIES'][0]
        if category not in current_app.config['COMPLAINT_CATEGORIES']:
            raise ValidationError(f"Invalid category: {category}")
        return category

    def create_complaint(self, client, form):
        category = self.validate_complaint(form)
        payload = {
            'title': form['title'].strip(),
            'description': form['description'].strip(),
            'roomNumber': form['roomNumber'].strip(),
            'category': category,
            'priority': DEFAULT_PRIORITY,
        }
        response = client.post('/api/student/complaints', json=payload,
                               default_error='Failed to submit complaint')
        check_success(response, 'Failed to submit complaint')
        logger.info(f"Complaint submitted: {payload['title']}")
        return unwrap_data(response)

    def add_comment(self, client, role, complaint_id, text):
        text = (text or '').strip()
        if not text:
            raise ValidationError("Please enter a comment")
        response = client.post(f'{self.list_path(role)}/{complaint_id}/comments', json={'text': text},
                               default_error='Failed to add comment')
        return unwrap_data(response)

    def update_status(self, client, role, complaint_id, status):
        if status not in current_app.config['COMPLAINT_STATUSES']:
            raise ValidationError(f"Invalid status: {status}")
        response = client.put(f'{self.list_path(role)}/{complaint_id}', json={'status': status},
                              default_error='Failed to update status')
        logger.info(f"Complaint {complaint_id} set to {status} by {role}")
        return unwrap_data(response)
