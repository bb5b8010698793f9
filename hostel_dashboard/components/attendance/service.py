"""
Attendance Service

Holds the attendance marking state for one staff user: the roster, the
pending-status map (unsaved marks per student and session), the active
session and the history view. Admin and warden pages share this logic and
differ only in their endpoints and default status.
"""
import logging
from datetime import date

from flask import current_app

from ...core.api_client import unwrap_list
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import date_key, normalize_student
from .. import register_component

logger = logging.getLogger(__name__)

SESSIONS = ('morning', 'evening')
STATUSES = ('present', 'absent')
DRAFT_NAME = 'attendance:{role}'


def _flip(status):
    return 'absent' if status == 'present' else 'present'


def normalize_record(record):
    """Attendance record with its student flattened for display"""
    student = record.get('student')
    if isinstance(student, dict):
        student = normalize_student(student)
    else:
        student = normalize_student({'_id': student})
    return {
        '_id': record.get('_id'),
        'student': student,
        'date': record.get('date'),
        'morningStatus': record.get('morningStatus', 'absent'),
        'eveningStatus': record.get('eveningStatus', 'absent'),
        'remarks': record.get('remarks'),
    }


class AttendanceSession:
    """Attendance marking state for one staff user and one calendar date"""

    def __init__(self, role, current_date, endpoints, default_status='absent', session='morning'):
        if default_status not in STATUSES:
            raise ValueError(f"Invalid default status: {default_status}")
        self.role = role
        self.current_date = current_date
        self.endpoints = endpoints
        self.default_status = default_status
        self.session = session
        self.roster = []
        self.pending = {}
        self.records = []
        self.history_records = []
        self.available_dates = []
        self.show_history = False
        self.selected_date = current_date
        self.loaded = False

    # -- state seeding -------------------------------------------------

    @staticmethod
    def _apply_records(pending, records):
        """Overwrite marks of roster students that have a record"""
        pending = dict(pending)
        for record in records:
            student_id = record['student']['_id']
            if student_id in pending:
                pending[student_id] = {
                    'morning': record['morningStatus'],
                    'evening': record['eveningStatus'],
                }
        return pending

    def _seed(self, roster, records):
        """Pending map for a roster: default for everyone, then existing records"""
        pending = {
            student['_id']: {'morning': self.default_status, 'evening': self.default_status}
            for student in roster
        }
        return self._apply_records(pending, records)

    def _merge_dates(self, dates, records):
        """Warden pages have no dates endpoint: derive dates from records seen so far"""
        known = set(dates)
        known.update(key for key in (date_key(r['date']) for r in records) if key)
        return sorted(known, reverse=True)

    # -- backend calls ---------------------------------------------------

    def fetch_records(self, client, day):
        """Records for one date; a date the backend does not know is empty"""
        path = self.endpoints['records'].format(date=day)
        try:
            payload = client.get(path, default_error='Failed to fetch attendance data')
        except ApiError as e:
            if e.status_code == 404:
                return []
            raise
        return [normalize_record(r) for r in unwrap_list(payload) if isinstance(r, dict)]

    def fetch_dates(self, client, records):
        if not self.endpoints.get('dates'):
            return self._merge_dates(self.available_dates, records)
        payload = client.get(self.endpoints['dates'], default_error='Failed to fetch available dates')
        keys = (date_key(d) for d in unwrap_list(payload))
        return sorted({key for key in keys if key}, reverse=True)

    # -- operations ------------------------------------------------------

    def load(self, client):
        """Fetch the roster and today's records, then seed the pending map

        Nothing is assigned until every call has succeeded.
        """
        payload = client.get(self.endpoints['students'], default_error='Failed to fetch students')
        roster = [normalize_student(s) for s in unwrap_list(payload) if isinstance(s, dict)]
        records = self.fetch_records(client, self.current_date)
        dates = self.fetch_dates(client, records)

        self.roster = roster
        self.records = records
        self.pending = self._seed(roster, records)
        self.available_dates = dates
        self.loaded = True
        logger.info(f"Loaded {self.role} attendance for {self.current_date}: "
                    f"{len(roster)} students, {len(records)} records")

    def status_for(self, student_id, session=None):
        marks = self.pending.get(student_id)
        if marks is None:
            return self.default_status
        return marks[session or self.session]

    def set_session(self, session):
        if session not in SESSIONS:
            raise ValidationError(f"Invalid session: {session}")
        self.session = session

    def toggle(self, student_id):
        """Flip one student's mark for the active session only"""
        marks = dict(self.pending.get(student_id) or {
            'morning': self.default_status,
            'evening': self.default_status,
        })
        marks[self.session] = _flip(marks[self.session])
        self.pending[student_id] = marks
        return marks[self.session]

    def batch(self):
        """One {studentId, status} entry per roster student for the active session"""
        return [
            {'studentId': student['_id'], 'status': self.status_for(student['_id'])}
            for student in self.roster
        ]

    def submit(self, client):
        """Send the batch, then re-fetch the date and re-seed from the saved records"""
        if not self.roster:
            raise ValidationError("No students to mark attendance for")

        payload = {
            'date': self.current_date,
            'session': self.session,
            'attendance': self.batch(),
        }
        client.post(self.endpoints['submit'], json=payload, default_error='Failed to submit attendance')
        records = self.fetch_records(client, self.current_date)
        dates = self.fetch_dates(client, records)

        self.records = records
        self.available_dates = dates
        self.pending = self._apply_records(self.pending, records)
        logger.info(f"Submitted {self.session} attendance for {self.current_date} "
                    f"({len(payload['attendance'])} students)")
        return payload

    def toggle_history(self, client):
        """Show or hide history; showing it starts at the current date

        Hiding it drops the viewed records; `records` always holds the
        current date.
        """
        if self.show_history:
            self.show_history = False
            self.history_records = []
            return
        records = self.fetch_records(client, self.current_date)
        self.show_history = True
        self.selected_date = self.current_date
        self.history_records = records

    def select_date(self, client, day):
        """Pick a history date; only fetches while history is shown"""
        if not date_key(day) or date_key(day) != day:
            raise ValidationError(f"Invalid date: {day}")
        if not self.show_history:
            self.selected_date = day
            return
        records = self.fetch_records(client, day)
        self.selected_date = day
        self.history_records = records
        if not self.endpoints.get('dates'):
            self.available_dates = self._merge_dates(self.available_dates, records)

    def history_rows(self):
        if not self.show_history:
            return []
        return [r for r in self.history_records if not r['date'] or date_key(r['date']) == self.selected_date]

    def summary(self):
        """Present/absent counts per session over the pending map"""
        counts = {s: {'present': 0, 'absent': 0} for s in SESSIONS}
        for student in self.roster:
            for session in SESSIONS:
                counts[session][self.status_for(student['_id'], session)] += 1
        return counts

    def rows(self):
        """Roster rows with the active session's pending mark"""
        return [
            dict(student, status=self.status_for(student['_id']))
            for student in self.roster
        ]


@register_component('attendance', pages={
    'admin': ('Attendance', 'attendance.page'),
    'warden': ('Attendance', 'attendance.page'),
})
class AttendanceService:
    """Service for the Attendance component"""

    def today(self):
        return date.today().isoformat()

    def default_status(self, role):
        overrides = current_app.config.get('ATTENDANCE_ROLE_DEFAULTS') or {}
        return overrides.get(role, current_app.config['ATTENDANCE_DEFAULT_STATUS'])

    def endpoints(self, role):
        return current_app.config['ATTENDANCE_ENDPOINTS'][role]

    def new_session(self, role):
        return AttendanceSession(
            role,
            self.today(),
            self.endpoints(role),
            default_status=self.default_status(role),
        )

    def get_session(self, drafts, draft_id, role):
        """Stored draft for today, or None when missing

        A draft from an earlier day is dropped from the store.
        """
        name = DRAFT_NAME.format(role=role)
        state = drafts.get(draft_id, name)
        if state is None:
            return None
        if state.current_date != self.today():
            drafts.discard(draft_id, name)
            return None
        return state

    def save_session(self, drafts, draft_id, state):
        drafts.put(draft_id, DRAFT_NAME.format(role=state.role), state)

    @staticmethod
    def record_summary(records):
        """Present counts per session over saved records"""
        counts = {s: {'present': 0, 'absent': 0} for s in SESSIONS}
        for record in records:
            for session in SESSIONS:
                status = record.get(f'{session}Status')
                if status in STATUSES:
                    counts[session][status] += 1
        return counts

    def todays_records(self, client, role):
        return self.new_session(role).fetch_records(client, self.today())
