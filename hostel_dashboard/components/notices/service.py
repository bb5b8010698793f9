"""
Notices Service
Hostel notice board: search, category filter and active/expired split,
plus publishing, editing and retiring notices for admins and wardens.
"""
import logging
from datetime import datetime, timedelta, timezone

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.forms import choice, form_list, form_text
from ...core.formatting import date_key, newest_first, parse_datetime
from .. import register_component

logger = logging.getLogger(__name__)

TABS = ('active', 'expired')
URGENT_IMPORTANCE = ('high', 'urgent')


@register_component('notices', pages={
    'student': ('Notices', 'notices.board'),
    'admin': ('Notices', 'notices.board'),
    'warden': ('Notices', 'notices.board'),
})
class NoticesService:
    """Service for the Notices component"""

    def now(self):
        return datetime.now(timezone.utc).replace(tzinfo=None)

    def fetch_notices(self, client):
        payload = client.get('/api/notices', default_error='Failed to fetch notices')
        check_success(payload, 'Failed to fetch notices')
        return newest_first(unwrap_list(payload, 'notices'))

    def is_expired(self, notice):
        expiry = parse_datetime(notice.get('expiryDate'))
        return expiry is not None and expiry < self.now()

    def is_live(self, notice):
        return bool(notice.get('isActive')) and not self.is_expired(notice)

    def filter_notices(self, notices, search='', category='all', tab='active'):
        filtered = list(notices)
        term = (search or '').strip().lower()
        if term:
            filtered = [
                n for n in filtered
                if term in (n.get('title') or '').lower() or term in (n.get('content') or '').lower()
            ]
        if category and category != 'all':
            filtered = [n for n in filtered if (n.get('category') or '').lower() == category.lower()]
        if tab == 'expired':
            return [n for n in filtered if not self.is_live(n)]
        return [n for n in filtered if self.is_live(n)]

    def categories(self, notices):
        return sorted({n['category'] for n in notices if n.get('category')}, key=str.lower)

    def urgent_notices(self, notices):
        """Live high-importance notices for the student home page"""
        urgent = [n for n in notices if self.is_live(n) and n.get('importance') in URGENT_IMPORTANCE]
        return urgent[:current_app.config['MAX_URGENT_NOTICES']]

    # -- staff management ------------------------------------------------

    def default_expiry(self):
        days = current_app.config['NOTICE_DEFAULT_EXPIRY_DAYS']
        return (self.now().date() + timedelta(days=days)).isoformat()

    @staticmethod
    def audience(values):
        """'all' on its own, or the chosen subset of the other audiences"""
        allowed = current_app.config['NOTICE_AUDIENCES']
        unknown = [v for v in values if v not in allowed]
        if unknown:
            raise ValidationError(f"Invalid audience: {unknown[0]}")
        if not values or 'all' in values:
            return ['all']
        return [a for a in allowed if a in values]

    def validate_notice(self, form):
        """Notice body from a staff form; nothing is sent when this raises"""
        title = form_text(form, 'title')
        content = form_text(form, 'content')
        if not title or not content:
            raise ValidationError("Title and content are required")

        expiry = form_text(form, 'expiryDate') or self.default_expiry()
        if date_key(expiry) != expiry:
            raise ValidationError(f"Invalid expiry date: {expiry}")

        config = current_app.config
        return {
            'title': title,
            'content': content,
            'category': choice(form, 'category', config['NOTICE_CATEGORIES'], 'category', 'general'),
            'importance': choice(form, 'importance', config['NOTICE_IMPORTANCE'], 'importance', 'normal'),
            'targetAudience': self.audience(form_list(form, 'targetAudience')),
            'expiryDate': expiry,
        }

    def create_notice(self, client, form):
        body = dict(self.validate_notice(form), isActive=True)
        response = client.post('/api/notices', json=body, default_error='Failed to publish notice')
        check_success(response, 'Failed to publish notice')
        logger.info(f"Notice published: {body['title']}")
        return unwrap_data(response)

    def update_notice(self, client, notice_id, form):
        body = self.validate_notice(form)
        response = client.put(f'/api/notices/{notice_id}', json=body, default_error='Failed to update notice')
        check_success(response, 'Failed to update notice')
        logger.info(f"Notice {notice_id} updated")
        return unwrap_data(response)

    def delete_notice(self, client, notice_id):
        response = client.delete(f'/api/notices/{notice_id}', default_error='Failed to delete notice')
        check_success(response, 'Failed to delete notice')
        logger.info(f"Notice {notice_id} deleted")

    def set_active(self, client, notice_id, active):
        response = client.patch(f'/api/notices/{notice_id}/status', json={'isActive': bool(active)},
                                default_error='Failed to change notice status')
        check_success(response, 'Failed to change notice status')
        logger.info(f"Notice {notice_id} {'activated' if active else 'deactivated'}")
        return bool(active)
