"""
Room Management Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import RoomManagementService

logger = logging.getLogger(__name__)

room_management_bp = Blueprint(
    'room_management',
    __name__,
    template_folder='templates',
    url_prefix='/dashboard/<any(admin, warden):role>/rooms'
)

# Service instance
service = RoomManagementService()


def back(role, **args):
    return redirect(url_for('room_management.rooms', role=role, **args))


@room_management_bp.route('')
@role_required()
def rooms(role):
    """Room table, block figures and the room form; ?edit=<id> loads a room"""
    search = request.args.get('q', '')
    block = request.args.get('block', 'all')
    status = request.args.get('status', 'all')

    all_rooms = []
    try:
        all_rooms = service.fetch_rooms(api_client(role))
    except ApiError as e:
        flash(str(e), 'error')

    config = current_app.config
    return render_template(
        'room_management/rooms.html',
        role=role,
        rooms=service.filter_rooms(all_rooms, search, block, status),
        blocks=service.block_stats(all_rooms, config['ROOM_BLOCKS']),
        editing=next((r for r in all_rooms if r.get('_id') == request.args.get('edit')), None),
        search=search,
        block=block,
        status=status,
        block_names=config['ROOM_BLOCKS'],
        floors=config['ROOM_FLOORS'],
        room_types=config['ROOM_TYPES'],
        statuses=config['ROOM_STATUSES'],
        price_periods=config['ROOM_PRICE_PERIODS'],
        facilities=config['ROOM_FACILITIES'],
    )


@room_management_bp.route('', methods=['POST'])
@role_required()
def create(role):
    try:
        service.create_room(api_client(role), request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash('Room created successfully', 'success')
    return back(role)


@room_management_bp.route('/<room_id>', methods=['POST'])
@role_required()
def update(role, room_id):
    try:
        service.update_room(api_client(role), room_id, request.form)
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
        return back(role, edit=room_id)

    flash('Room updated successfully', 'success')
    return back(role)


@room_management_bp.route('/<room_id>/delete', methods=['POST'])
@role_required()
def delete(role, room_id):
    try:
        service.delete_room(api_client(role), room_id)
    except ApiError as e:
        flash(str(e), 'error')
    else:
        flash('Room deleted successfully', 'success')
    return back(role)


def init_room_management(app):
    """Initialize Room Management component with Flask app"""
    app.register_blueprint(room_management_bp)
    return room_management_bp
