"""
Mess Menu Service
Weekly menu for students (with reviews) and warden menu maintenance
"""
import logging
from datetime import date

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from .. import register_component

logger = logging.getLogger(__name__)

MEALS = ('breakfast', 'lunch', 'snacks', 'dinner')
MIN_RATING = 1
MAX_RATING = 5


def _plain_id(value):
    if isinstance(value, dict):
        return value.get('_id')
    return value


def normalize_reviews(item):
    """Copy of a menu item whose review userIds are plain id strings"""
    item = dict(item)
    item['reviews'] = [
        dict(review, userId=_plain_id(review.get('userId')))
        for review in item.get('reviews') or []
    ]
    try:
        item['averageRating'] = float(item.get('averageRating') or 0)
    except (TypeError, ValueError):
        item['averageRating'] = 0.0
    return item


@register_component('mess_menu', pages={
    'student': ('Mess Menu', 'mess_menu.student_menu'),
    'warden': ('Mess Menu', 'mess_menu.warden_menu'),
})
class MessMenuService:
    """Service for the Mess Menu component"""

    def today(self):
        return date.today()

    def day_order(self, item):
        days = current_app.config['DAYS_OF_WEEK']
        return days.index(item.get('day')) if item.get('day') in days else len(days)

    def fetch_menu(self, client, day=None):
        params = {'day': day} if day and day != 'all' else None
        payload = client.get('/api/menu', params=params, default_error='Failed to load mess menu')
        items = [normalize_reviews(item) for item in unwrap_list(payload, 'menu')]
        return sorted(items, key=self.day_order)

    def todays_menu(self, items):
        """Menu item whose day is today's weekday name, if any"""
        day_name = self.today().strftime('%A')
        return next((item for item in items if item.get('day') == day_name), None)

    @staticmethod
    def review_by(item, user_id):
        if not item or not user_id:
            return None
        return next((r for r in item.get('reviews', []) if str(r.get('userId')) == str(user_id)), None)

    def submit_review(self, client, menu_id, rating, comment):
        """Post a review and return the item's new (reviews, averageRating)"""
        try:
            rating = int(rating)
        except (TypeError, ValueError):
            raise ValidationError("Please select a rating") from None
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        response = client.post(f'/api/menu/{menu_id}/reviews',
                               json={'comment': (comment or '').strip(), 'rating': rating},
                               default_error='Failed to submit feedback')
        check_success(response, 'Failed to submit feedback')
        data = normalize_reviews(unwrap_data(response) or {})
        return data['reviews'], data['averageRating']

    def validate_item(self, form):
        body = {field: (form.get(field) or '').strip() for field in ('day',) + MEALS}
        if not all(body.values()):
            raise ValidationError("Please fill all fields")
        if body['day'] not in current_app.config['DAYS_OF_WEEK']:
            raise ValidationError(f"Invalid day: {body['day']}")
        return body

    def create_item(self, client, form):
        body = self.validate_item(form)
        response = client.post('/api/menu', json=body, default_error='Failed to save menu item')
        check_success(response, 'Failed to save menu item')
        logger.info(f"Menu item added for {body['day']}")
        return unwrap_data(response)

    def update_item(self, client, menu_id, form):
        body = self.validate_item(form)
        response = client.put(f'/api/menu/{menu_id}', json=body, default_error='Failed to save menu item')
        check_success(response, 'Failed to save menu item')
        logger.info(f"Menu item {menu_id} updated")
        return unwrap_data(response)

    def delete_item(self, client, menu_id):
        response = client.delete(f'/api/menu/{menu_id}', default_error='Failed to delete menu item')
        check_success(response, 'Failed to delete menu item')
        logger.info(f"Menu item {menu_id} deleted")
