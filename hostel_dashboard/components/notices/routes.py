"""
Notices Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import TABS, NoticesService

logger = logging.getLogger(__name__)

notices_bp = Blueprint('notices', __name__, template_folder='templates')

# Service instance
service = NoticesService()

STAFF_NOTICES = '/dashboard/<any(admin, warden):role>/notices'


@notices_bp.route('/dashboard/<any(student, admin, warden):role>/notices')
@role_required()
def board(role):
    """Notice board with search, category filter and active/expired tabs

    Staff get the same board with the publish form; ?edit=<id> loads a
    notice into it.
    """
    search = request.args.get('q', '')
    category = request.args.get('category', 'all')
    tab = request.args.get('tab', 'active')
    if tab not in TABS:
        tab = 'active'

    notices = []
    try:
        notices = service.fetch_notices(api_client(role))
    except ApiError as e:
        flash(str(e), 'error')

    context = dict(
        role=role,
        notices=service.filter_notices(notices, search, category, tab),
        categories=service.categories(notices),
        search=search,
        category=category,
        tab=tab,
        tabs=TABS,
    )
    if role == 'student':
        return render_template('notices/board.html', **context)

    config = current_app.config
    return render_template(
        'notices/manage.html',
        editing=next((n for n in notices if n.get('_id') == request.args.get('edit')), None),
        default_expiry=service.default_expiry(),
        notice_categories=config['NOTICE_CATEGORIES'],
        importance_levels=config['NOTICE_IMPORTANCE'],
        audiences=config['NOTICE_AUDIENCES'],
        **context
    )


def back(role, **args):
    return redirect(url_for('notices.board', role=role, **args))


@notices_bp.route(STAFF_NOTICES, methods=['POST'])
@role_required()
def create(role):
    try:
        service.create_notice(api_client(role), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Notice published successfully', 'success')
    return back(role)


@notices_bp.route(f'{STAFF_NOTICES}/<notice_id>', methods=['POST'])
@role_required()
def update(role, notice_id):
    try:
        service.update_notice(api_client(role), notice_id, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(role, edit=notice_id)

    flash('Notice updated successfully', 'success')
    return back(role)


@notices_bp.route(f'{STAFF_NOTICES}/<notice_id>/delete', methods=['POST'])
@role_required()
def delete(role, notice_id):
    try:
        service.delete_notice(api_client(role), notice_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Notice deleted successfully', 'success')
    return back(role)


@notices_bp.route(f'{STAFF_NOTICES}/<notice_id>/status', methods=['POST'])
@role_required()
def set_status(role, notice_id):
    """Activate or deactivate a notice without editing it"""
    active = request.form.get('isActive') == 'true'
    try:
        service.set_active(api_client(role), notice_id, active)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash(f"Notice {'activated' if active else 'deactivated'}", 'success')
    return back(role, tab=request.form.get('tab', 'active'))


def init_notices(app):
    """Initialize Notices component with Flask app"""
    app.register_blueprint(notices_bp)
    return notices_bp
