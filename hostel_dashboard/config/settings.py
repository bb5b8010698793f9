"""
Dashboard configuration settings
"""
import os
from datetime import timedelta


class DashboardConfig:
    """Centralized configuration for dashboard"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)

    # Backend REST API
    API_BASE_URL = os.environ.get('HOSTEL_API_URL', 'http://localhost:5000')
    API_TIMEOUT = int(os.environ.get('HOSTEL_API_TIMEOUT', 10))

    # Rate limiting
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_DEFAULT = "200 per minute"
    LOGIN_RATE_LIMIT = "10 per minute"

    # Role configuration: where each role keeps its token and where it logs in
    ROLES = {
        'student': {
            'title': 'Student',
            'token_key': 'token',
            'home': 'main.student_home',
        },
        'admin': {
            'title': 'Admin',
            'token_key': 'adminToken',
            'home': 'main.admin_home',
        },
        'warden': {
            'title': 'Warden',
            'token_key': 'wardenToken',
            'home': 'main.warden_home',
        },
    }

    # Attendance marking
    ATTENDANCE_DEFAULT_STATUS = os.environ.get('ATTENDANCE_DEFAULT_STATUS', 'absent')
    # Per-role override, e.g. {'warden': 'present'}; empty means every role uses the default
    ATTENDANCE_ROLE_DEFAULTS = {}
    ATTENDANCE_ENDPOINTS = {
        'admin': {
            'students': '/api/admin/students',
            'records': '/api/admin/attendance/{date}',
            'submit': '/api/admin/attendance',
            'dates': '/api/admin/attendance/dates/all',
        },
        'warden': {
            'students': '/api/admin/students',
            'records': '/api/warden/attendance/{date}',
            'submit': '/api/warden/attendance',
            'dates': None,
        },
    }

    # Form choices
    COMPLAINT_CATEGORIES = ['Maintenance', 'Cleanliness', 'Food', 'Security', 'Other']
    COMPLAINT_STATUSES = ['pending', 'in_progress', 'resolved', 'rejected']
    LEAVE_TYPES = ['home', 'medical', 'academic', 'emergency', 'other']
    DAYS_OF_WEEK = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
    PAYMENT_METHODS = {
        'upi': 'UPI',
        'netbanking': 'Net Banking',
        'card': 'Credit/Debit Card',
        'wallet': 'Wallet',
    }
    NOTICE_CATEGORIES = ['general', 'academic', 'hostel', 'event', 'emergency', 'other']
    NOTICE_IMPORTANCE = ['normal', 'important', 'urgent']
    NOTICE_AUDIENCES = ['all', 'students', 'wardens', 'admin']
    NOTICE_DEFAULT_EXPIRY_DAYS = 7
    ROOM_BLOCKS = ['A', 'B', 'C', 'D']
    ROOM_FLOORS = ['1st Floor', '2nd Floor', '3rd Floor', '4th Floor']
    ROOM_TYPES = [
        'AC Room - Boys', 'AC Room - Girls',
        'Non-AC Room - Boys', 'Non-AC Room - Girls',
        'Deluxe Room - Boys', 'Deluxe Room - Girls',
    ]
    ROOM_STATUSES = ['Available', 'Full', 'Maintenance']
    ROOM_PRICE_PERIODS = ['month', 'semester', 'year']
    ROOM_FACILITIES = [
        'Air Conditioning', 'Study Table', 'Premium Furniture', 'High-Speed WiFi',
        'Attached Bathroom', 'Fan', 'Geyser', 'Laundry Service',
    ]
    STUDENT_YEARS = ['1st Year', '2nd Year', '3rd Year', '4th Year']
    STUDENT_STATUSES = ['Active', 'Pending', 'Inactive']
    WARDEN_STATUSES = ['Active', 'On Leave', 'Inactive']

    # UI settings
    MAX_LOG_ENTRIES = 1000
    MAX_URGENT_NOTICES = 3
    MAX_ATTENDANCE_DRAFTS = 500
    ATTENDANCE_DRAFT_MAX_AGE = 8 * 3600  # seconds
