"""
Mess Menu Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, current_user, role_required
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import format_long_date
from .service import MAX_RATING, MEALS, MessMenuService

logger = logging.getLogger(__name__)

mess_menu_bp = Blueprint('mess_menu', __name__, template_folder='templates')

# Service instance
service = MessMenuService()


def student_id():
    user = current_user('student')
    return user.get('_id') or user.get('id')


@mess_menu_bp.route('/dashboard/student/mess')
@role_required('student')
def student_menu():
    """Weekly menu, today's meals and the review form for ?review=<id>"""
    items = []
    try:
        items = service.fetch_menu(api_client('student'))
    except ApiError as e:
        flash(str(e), 'error')

    reviewing = next((i for i in items if i.get('_id') == request.args.get('review')), None)
    return render_template(
        'mess_menu/student.html',
        items=items,
        today_item=service.todays_menu(items),
        today_label=format_long_date(service.today()),
        reviewing=reviewing,
        existing_review=service.review_by(reviewing, student_id()),
        reviewed_ids={i.get('_id') for i in items if service.review_by(i, student_id())},
        ratings=range(1, MAX_RATING + 1),
        meals=MEALS,
    )


@mess_menu_bp.route('/dashboard/student/mess/<menu_id>/review', methods=['POST'])
@role_required('student')
def student_review(menu_id):
    try:
        service.submit_review(api_client('student'), menu_id,
                              request.form.get('rating'), request.form.get('comment'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return redirect(url_for('mess_menu.student_menu', review=menu_id))

    flash('Your feedback has been submitted', 'success')
    return redirect(url_for('mess_menu.student_menu'))


@mess_menu_bp.route('/dashboard/warden/mess-menu')
@role_required('warden')
def warden_menu():
    """Menu table with day filter; ?edit=<id> opens the edit form"""
    day = request.args.get('day', 'all')
    items = []
    try:
        items = service.fetch_menu(api_client('warden'), day)
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'mess_menu/warden.html',
        items=items,
        day=day,
        days=current_app.config['DAYS_OF_WEEK'],
        editing=next((i for i in items if i.get('_id') == request.args.get('edit')), None),
        meals=MEALS,
    )


@mess_menu_bp.route('/dashboard/warden/mess-menu', methods=['POST'])
@role_required('warden')
def warden_create():
    try:
        service.create_item(api_client('warden'), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('New menu item added', 'success')
    return redirect(url_for('mess_menu.warden_menu'))


@mess_menu_bp.route('/dashboard/warden/mess-menu/<menu_id>', methods=['POST'])
@role_required('warden')
def warden_update(menu_id):
    try:
        service.update_item(api_client('warden'), menu_id, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return redirect(url_for('mess_menu.warden_menu', edit=menu_id))

    flash('Menu item updated successfully', 'success')
    return redirect(url_for('mess_menu.warden_menu'))


@mess_menu_bp.route('/dashboard/warden/mess-menu/<menu_id>/delete', methods=['POST'])
@role_required('warden')
def warden_delete(menu_id):
    try:
        service.delete_item(api_client('warden'), menu_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Menu item deleted successfully', 'success')
    return redirect(url_for('mess_menu.warden_menu'))


def init_mess_menu(app):
    """Initialize Mess Menu component with Flask app"""
    app.register_blueprint(mess_menu_bp)
    return mess_menu_bp
