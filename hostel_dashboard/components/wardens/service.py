"""
Warden Management Service
Admin screen for warden accounts: search, active/inactive tabs, add, edit,
delete, password reset and status changes against /api/admin/wardens.
"""
import logging
from datetime import date

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.forms import choice, form_text
from ...core.formatting import date_key
from .. import register_component

logger = logging.getLogger(__name__)

TABS = ('all', 'active', 'inactive')
REQUIRED_FIELDS = ('name', 'email', 'employeeId', 'contactNumber')
OPTIONAL_FIELDS = ('qualification', 'address', 'aadhaar')
MIN_PASSWORD_LENGTH = 8


@register_component('wardens', pages={
    'admin': ('Staff', 'wardens.staff'),
})
class WardensService:
    """Service for the Warden Management component"""

    def today(self):
        return date.today().isoformat()

    def fetch_wardens(self, client):
        payload = client.get('/api/admin/wardens', default_error='Failed to fetch wardens')
        return unwrap_list(payload, 'wardens')

    @staticmethod
    def filter_wardens(wardens, search='', tab='all'):
        """Search name, employee id and qualification; inactive means any status but Active"""
        term = (search or '').strip().lower()
        filtered = []
        for warden in wardens:
            haystack = [str(warden.get(f) or '').lower() for f in ('name', 'employeeId', 'qualification')]
            if term and not any(term in value for value in haystack):
                continue
            active = warden.get('status') == 'Active'
            if tab == 'active' and not active:
                continue
            if tab == 'inactive' and active:
                continue
            filtered.append(warden)
        return filtered

    @staticmethod
    def check_password(password):
        if len(password or '') < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return password

    def validate_new_warden(self, form):
        body = {field: form_text(form, field) for field in REQUIRED_FIELDS + OPTIONAL_FIELDS}
        if not all(body[field] for field in REQUIRED_FIELDS):
            raise ValidationError("Name, email, employee ID and contact number are required")

        join_date = form_text(form, 'joinDate') or self.today()
        if date_key(join_date) != join_date:
            raise ValidationError(f"Invalid join date: {join_date}")

        body['joinDate'] = join_date
        body['status'] = choice(form, 'status', current_app.config['WARDEN_STATUSES'], 'status', 'Active')
        body['password'] = self.check_password(form.get('password'))
        return body

    @staticmethod
    def profile_changes(form):
        """Only the profile fields that were filled in"""
        changes = {
            field: form_text(form, field)
            for field in REQUIRED_FIELDS + OPTIONAL_FIELDS
            if form_text(form, field)
        }
        if not changes:
            raise ValidationError("Nothing to update")
        return changes

    def create_warden(self, client, form):
        body = self.validate_new_warden(form)
        response = client.post('/api/admin/wardens', json=body, default_error='Failed to add warden')
        check_success(response, 'Failed to add warden')
        logger.info(f"Warden {body['employeeId']} added")
        return unwrap_data(response)

    def update_warden(self, client, warden_id, form):
        body = self.profile_changes(form)
        response = client.put(f'/api/admin/wardens/{warden_id}', json=body, default_error='Failed to update warden')
        check_success(response, 'Failed to update warden')
        logger.info(f"Warden {warden_id} updated")
        return unwrap_data(response)

    def delete_warden(self, client, warden_id):
        response = client.delete(f'/api/admin/wardens/{warden_id}', default_error='Failed to delete warden')
        check_success(response, 'Failed to delete warden')
        logger.info(f"Warden {warden_id} deleted")

    def reset_password(self, client, warden_id, password):
        body = {'newPassword': self.check_password(password)}
        response = client.patch(f'/api/admin/wardens/{warden_id}/password', json=body,
                                default_error='Failed to reset password')
        check_success(response, 'Failed to reset password')
        logger.info(f"Password reset for warden {warden_id}")

    def set_status(self, client, warden_id, status):
        if status not in current_app.config['WARDEN_STATUSES']:
            raise ValidationError(f"Invalid status: {status}")
        response = client.patch(f'/api/admin/wardens/{warden_id}/status', json={'status': status},
                                default_error='Failed to update status')
        check_success(response, 'Failed to update status')
        logger.info(f"Warden {warden_id} status set to {status}")
        return status
