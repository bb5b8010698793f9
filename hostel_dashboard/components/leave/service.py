"""
Leave Service
Student leave applications and staff approval
"""
import logging
from datetime import date

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.formatting import newest_first, parse_date
from .. import register_component

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('leaveType', 'startDate', 'endDate', 'reason', 'destination', 'contactDuringLeave')
STUDENT_TABS = ('all', 'pending', 'approved', 'rejected')
STAFF_TABS = ('pending', 'approved', 'rejected')


def _student_matches(application, term):
    student = application.get('student') if isinstance(application.get('student'), dict) else {}
    room = student.get('roomId') if isinstance(student.get('roomId'), dict) else {}
    fields = [
        student.get('name'),
        student.get('studentId'),
        room.get('roomNumber'),
        application.get('reason'),
    ]
    return any(term in str(value).lower() for value in fields if value)


@register_component('leave', pages={
    'student': ('Leave', 'leave.student_list'),
    'admin': ('Leave Requests', 'leave.staff_list'),
    'warden': ('Leave Requests', 'leave.staff_list'),
})
class LeaveService:
    """Service for the Leave component"""

    def today(self):
        return date.today()

    def fetch_applications(self, client, role):
        payload = client.get(f'/api/{role}/leave', default_error='Failed to load leave applications')
        return newest_first(unwrap_list(payload, 'leaves', 'leaveApplications'))

    @staticmethod
    def by_tab(applications, tab):
        if tab == 'all':
            return list(applications)
        return [app for app in applications if app.get('status') == tab]

    @staticmethod
    def counts(applications):
        counts = {status: 0 for status in STAFF_TABS}
        for app in applications:
            if app.get('status') in counts:
                counts[app['status']] += 1
        return counts

    def filter_staff(self, applications, tab='pending', status='all', search=''):
        """Staff list: status filter, then search, then the active tab"""
        filtered = list(applications)
        if status and status != 'all':
            filtered = [app for app in filtered if app.get('status') == status]
        term = (search or '').strip().lower()
        if term:
            filtered = [app for app in filtered if _student_matches(app, term)]
        return self.by_tab(filtered, tab if tab in STAFF_TABS else 'pending')

    def validate_application(self, form):
        """Return the cleaned request body or raise ValidationError"""
        if any(not (form.get(field) or '').strip() for field in REQUIRED_FIELDS):
            raise ValidationError("Please fill all required fields")

        leave_type = form['leaveType'].strip()
        if leave_type not in current_app.config['LEAVE_TYPES']:
            raise ValidationError(f"Invalid leave type: {leave_type}")

        start = parse_date(form['startDate'])
        end = parse_date(form['endDate'])
        if start is None or end is None or start < self.today() or end < start:
            raise ValidationError("Invalid date selection. Please check your dates.")

        return {
            'leaveType': leave_type,
            'startDate': start.isoformat(),
            'endDate': end.isoformat(),
            'reason': form['reason'].strip(),
            'destination': form['destination'].strip(),
            'contactDuringLeave': form['contactDuringLeave'].strip(),
            'parentApproval': form.get('parentApproval') in ('on', 'true', '1', True),
        }

    def create_application(self, client, form):
        body = self.validate_application(form)
        response = client.post('/api/student/leave', json=body,
                               default_error='Failed to submit leave application')
        check_success(response, 'Failed to submit leave application')
        logger.info(f"Leave application submitted for {body['startDate']}..{body['endDate']}")
        return unwrap_data(response)

    def update_application(self, client, application, form):
        """Edit a leave application; only pending ones may change"""
        if application is None:
            raise ValidationError("Leave application not found")
        if application.get('status') != 'pending':
            raise ValidationError("Only pending leave applications can be edited")
        body = self.validate_application(form)
        response = client.put(f"/api/student/leave/{application['_id']}/edit", json=body,
                              default_error='Failed to update leave application')
        check_success(response, 'Failed to update leave application')
        return unwrap_data(response)

    def delete_application(self, client, leave_id):
        response = client.delete(f'/api/student/leave/{leave_id}/delete',
                                 default_error='Failed to delete application')
        check_success(response, 'Failed to delete application')
        logger.info(f"Leave application {leave_id} deleted")

    def review_application(self, client, role, leave_id, status, remarks=''):
        """Approve or reject with optional remarks"""
        if status not in ('approved', 'rejected'):
            raise ValidationError(f"Invalid status: {status}")
        response = client.put(f'/api/{role}/leave/{leave_id}',
                              json={'status': status, 'remarks': (remarks or '').strip()},
                              default_error='Failed to update application')
        check_success(response, 'Failed to update application')
        logger.info(f"Leave {leave_id} {status} by {role}")
        return unwrap_data(response)
