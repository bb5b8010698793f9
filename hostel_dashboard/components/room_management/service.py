"""
Room Management Service

Room inventory for admins and wardens: list rooms newest first, filter by
block and status, per-block occupancy figures and room create / update /
delete against /api/rooms.
"""
import logging

from flask import current_app

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ValidationError
from ...core.forms import choice, form_list, form_number, form_text
from ...core.formatting import newest_first
from .. import register_component

logger = logging.getLogger(__name__)

# Room status -> block statistic it counts towards
STATUS_BUCKETS = {
    'Full': 'occupied',
    'Available': 'vacant',
    'Maintenance': 'maintenance',
}


@register_component('room_management', pages={
    'admin': ('Rooms', 'room_management.rooms'),
    'warden': ('Rooms', 'room_management.rooms'),
})
class RoomManagementService:
    """Service for the Room Management component"""

    def fetch_rooms(self, client):
        payload = client.get('/api/rooms', default_error='Failed to load rooms data')
        return newest_first(unwrap_list(payload, 'rooms'))

    @staticmethod
    def filter_rooms(rooms, search='', block='all', status='all'):
        """Search room number and type; exact block and status filters"""
        term = (search or '').strip().lower()
        filtered = []
        for room in rooms:
            number = str(room.get('roomNumber') or '').lower()
            room_type = str(room.get('roomType') or '').lower()
            if term and term not in number and term not in room_type:
                continue
            if block and block != 'all' and room.get('block') != block:
                continue
            if status and status != 'all' and room.get('status') != status:
                continue
            filtered.append(room)
        return filtered

    @staticmethod
    def block_stats(rooms, blocks):
        """Total, occupied, vacant and maintenance counts for each block"""
        stats = {
            name: {'name': f'Block {name}', 'total': 0, 'occupied': 0, 'vacant': 0, 'maintenance': 0}
            for name in blocks
        }
        for room in rooms:
            block = str(room.get('block') or '')[:1].upper()
            if block not in stats:
                continue
            stats[block]['total'] += 1
            bucket = STATUS_BUCKETS.get(room.get('status'))
            if bucket:
                stats[block][bucket] += 1
        return [stats[name] for name in blocks]

    def validate_room(self, form):
        """Room body from the staff form; nothing is sent when this raises"""
        config = current_app.config
        room_number = form_text(form, 'roomNumber').upper()
        if not room_number:
            raise ValidationError("Room number is required")

        capacity = form_number(form, 'capacity', 'Capacity', minimum=1)
        occupied = form_number(form, 'occupiedCount', 'Occupied count', default=0)
        if occupied > capacity:
            raise ValidationError("Occupied count cannot exceed capacity")

        facilities = form_list(form, 'facilities')
        unknown = [f for f in facilities if f not in config['ROOM_FACILITIES']]
        if unknown:
            raise ValidationError(f"Invalid facility: {unknown[0]}")

        return {
            'block': choice(form, 'block', config['ROOM_BLOCKS'], 'block'),
            'roomNumber': room_number,
            'floor': choice(form, 'floor', config['ROOM_FLOORS'], 'floor', config['ROOM_FLOORS'][0]),
            'capacity': capacity,
            'occupiedCount': occupied,
            'roomType': choice(form, 'roomType', config['ROOM_TYPES'], 'room type'),
            'description': form_text(form, 'description'),
            'facilities': facilities,
            'price': form_number(form, 'price', 'Price', kind=float, default=0.0),
            'pricePeriod': choice(form, 'pricePeriod', config['ROOM_PRICE_PERIODS'], 'price period', 'month'),
            'status': choice(form, 'status', config['ROOM_STATUSES'], 'status', 'Available'),
            'imageUrl': form_text(form, 'imageUrl'),
        }

    def create_room(self, client, form):
        body = self.validate_room(form)
        response = client.post('/api/rooms', json=body, default_error='Failed to create room')
        check_success(response, 'Failed to create room')
        logger.info(f"Room {body['block']}-{body['roomNumber']} created")
        return unwrap_data(response)

    def update_room(self, client, room_id, form):
        body = self.validate_room(form)
        response = client.put(f'/api/rooms/{room_id}', json=body, default_error='Failed to update room')
        check_success(response, 'Failed to update room')
        logger.info(f"Room {room_id} updated")
        return unwrap_data(response)

    def delete_room(self, client, room_id):
        response = client.delete(f'/api/rooms/{room_id}', default_error='Failed to delete room')
        check_success(response, 'Failed to delete room')
        logger.info(f"Room {room_id} deleted")
