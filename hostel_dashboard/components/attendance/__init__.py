"""
Attendance Component
Morning/evening attendance marking and history for admins and wardens
"""
from .routes import attendance_bp, init_attendance
from .service import AttendanceService, AttendanceSession

__all__ = ['attendance_bp', 'init_attendance', 'AttendanceService', 'AttendanceSession']
