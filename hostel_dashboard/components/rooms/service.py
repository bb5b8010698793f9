"""
Rooms Service

Student view of their own room and roommates, and the admin room
allocation screen (allocate / deallocate students to rooms).
"""
import logging

from ...core.api_client import check_success, unwrap_data, unwrap_list
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import NOT_AVAILABLE
from .. import register_component

logger = logging.getLogger(__name__)

ALLOCATION_FILTERS = ('All', 'Allocated', 'Unallocated')

ROOM_RULES = [
    "No smoking or alcohol consumption in rooms",
    "Lights out by 11:00 PM on weekdays",
    "Visitors must leave by 9:00 PM",
    "Keep noise levels reasonable after 10:00 PM",
    "No cooking in rooms - use common kitchen area",
    "Report any damages immediately",
    "No pets allowed",
]

STUDENT_FIELDS = ('name', 'studentId', 'email', 'phone', 'course', 'year', 'status')
ROOM_FIELDS = ('block', 'roomNumber', 'floor', 'roomType', 'status')


def _with_fallbacks(record, fields):
    result = dict(record)
    for field in fields:
        if result.get(field) in (None, ''):
            result[field] = NOT_AVAILABLE
    return result


@register_component('rooms', pages={
    'student': ('My Room', 'rooms.student_room'),
    'admin': ('Room Allocation', 'rooms.allocation'),
})
class RoomsService:
    """Service for the Rooms component"""

    def fetch_room_info(self, client):
        """(student, room) for the logged-in student; room is None when unallocated"""
        payload = client.get('/api/student/room-info', default_error='Failed to fetch room details')
        check_success(payload, 'Failed to fetch room details')
        data = unwrap_data(payload) or {}
        student = data.get('student') if isinstance(data, dict) else None
        if not isinstance(student, dict):
            raise ApiError('Invalid data format received from server')

        room = student.get('room')
        if isinstance(room, dict):
            room = _with_fallbacks(room, ROOM_FIELDS)
            room['capacity'] = room.get('capacity') or 0
            room['occupiedCount'] = room.get('occupiedCount') or 0
            room['facilities'] = room.get('facilities') or []
            room['occupants'] = [
                _with_fallbacks(o, STUDENT_FIELDS) for o in room.get('occupants') or []
                if isinstance(o, dict) and o.get('_id') != student.get('_id')
            ]
        else:
            room = None
        return _with_fallbacks(student, STUDENT_FIELDS), room

    def fetch_students(self, client):
        payload = client.get('/api/room-allocation/students', default_error='Failed to fetch students')
        return unwrap_list(payload, 'students')

    def fetch_rooms(self, client):
        payload = client.get('/api/room-allocation/rooms', default_error='Failed to fetch rooms')
        return unwrap_list(payload, 'rooms')

    @staticmethod
    def filter_students(students, search='', status='All'):
        """Search by name or registration number; status All, Allocated or Unallocated"""
        term = (search or '').strip().lower()
        filtered = []
        for student in students:
            name = (student.get('name') or '').lower()
            reg_number = (student.get('registrationNumber') or '').lower()
            if term and term not in name and term not in reg_number:
                continue
            if status == 'Allocated' and not student.get('roomId'):
                continue
            if status == 'Unallocated' and student.get('roomId'):
                continue
            filtered.append(student)
        return filtered

    @staticmethod
    def available_rooms(rooms, student):
        """Rooms this student can move into: available, same gender, not full"""
        if not student:
            return []
        return [
            room for room in rooms
            if room.get('status') == 'Available'
            and room.get('gender') == student.get('gender')
            and (room.get('occupiedCount') or 0) < (room.get('capacity') or 0)
        ]

    def allocate(self, client, student_id, room_id):
        if not student_id or not room_id:
            raise ValidationError("Select a student and a room")
        response = client.post('/api/room-allocation/allocate',
                               json={'studentId': student_id, 'roomId': room_id},
                               default_error='Failed to allocate room')
        check_success(response, 'Failed to allocate room')
        logger.info(f"Allocated student {student_id} to room {room_id}")
        return response

    def deallocate(self, client, student_ids):
        """Remove each student from their room; returns how many were deallocated

        Stops at the first failure. The raised error says how many students
        were already deallocated.
        """
        if not student_ids:
            raise ValidationError("Select at least one student")
        done = 0
        for student_id in student_ids:
            try:
                response = client.post('/api/room-allocation/deallocate', json={'studentId': student_id},
                                       default_error='Failed to deallocate room')
                check_success(response, 'Failed to deallocate room')
            except ApiError as e:
                if not done:
                    raise
                logger.warning(f"Deallocation stopped after {done} of {len(student_ids)} students")
                raise ApiError(f"{e} ({done} of {len(student_ids)} students were deallocated before the failure)",
                               status_code=e.status_code) from e
            done += 1
            logger.info(f"Deallocated student {student_id}")
        return done
