"""
Warden Management Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import TABS, WardensService

logger = logging.getLogger(__name__)

wardens_bp = Blueprint(
    'wardens',
    __name__,
    template_folder='templates',
    url_prefix='/dashboard/admin/staff'
)

# Service instance
service = WardensService()


def back(**args):
    return redirect(url_for('wardens.staff', **args))


@wardens_bp.route('')
@role_required('admin')
def staff():
    """Warden table with search and tabs; ?edit=<id> opens the profile form"""
    search = request.args.get('q', '')
    tab = request.args.get('tab', 'all')
    if tab not in TABS:
        tab = 'all'

    wardens = []
    try:
        wardens = service.fetch_wardens(api_client('admin'))
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'wardens/staff.html',
        wardens=service.filter_wardens(wardens, search, tab),
        editing=next((w for w in wardens if w.get('_id') == request.args.get('edit')), None),
        search=search,
        tab=tab,
        tabs=TABS,
        statuses=current_app.config['WARDEN_STATUSES'],
        today=service.today(),
    )


@wardens_bp.route('', methods=['POST'])
@role_required('admin')
def create():
    try:
        service.create_warden(api_client('admin'), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"Warden {request.form.get('name', '').strip()} added successfully", 'success')
    return back()


@wardens_bp.route('/<warden_id>', methods=['POST'])
@role_required('admin')
def update(warden_id):
    try:
        service.update_warden(api_client('admin'), warden_id, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(edit=warden_id)

    flash('Warden updated successfully', 'success')
    return back()


@wardens_bp.route('/<warden_id>/delete', methods=['POST'])
@role_required('admin')
def delete(warden_id):
    try:
        service.delete_warden(api_client('admin'), warden_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Warden deleted successfully', 'success')
    return back()


@wardens_bp.route('/<warden_id>/password', methods=['POST'])
@role_required('admin')
def reset_password(warden_id):
    try:
        service.reset_password(api_client('admin'), warden_id, request.form.get('newPassword'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(edit=warden_id)

    flash('Password has been reset', 'success')
    return back()


@wardens_bp.route('/<warden_id>/status', methods=['POST'])
@role_required('admin')
def set_status(warden_id):
    try:
        status = service.set_status(api_client('admin'), warden_id, request.form.get('status'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"Status updated to {status}", 'success')
    return back(tab=request.form.get('tab', 'all'))


def init_wardens(app):
    """Initialize Warden Management component with Flask app"""
    app.register_blueprint(wardens_bp)
    return wardens_bp
