"""
Auth Service
Login, admin registration and profile lookups against the backend
"""
import logging

from ...core.api_client import check_success, unwrap_data
from ...core.exceptions import ApiError, ValidationError
from .. import register_component

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@register_component('auth', pages={
    'student': ('Profile', 'auth.profile'),
    'admin': ('Profile', 'auth.profile'),
    'warden': ('Profile', 'auth.profile'),
})
class AuthService:
    """Service for the Auth component"""

    def login(self, client, role, email, password):
        """Authenticate and return (token, user)

        Raises:
            ValidationError: missing fields, or the account belongs to another role
            ApiError: backend refused the credentials
        """
        email = (email or '').strip()
        password = password or ''
        if not email or not password:
            raise ValidationError("Please fill in all fields")

        payload = client.post(
            '/api/auth/login',
            json={'email': email, 'password': password, 'role': role},
            default_error='Login failed',
        )
        check_success(payload, 'Login failed')

        data = unwrap_data(payload) if isinstance(payload.get('data'), dict) else payload
        token = data.get('token') or payload.get('token')
        user = data.get('user') or payload.get('user') or {}
        if not token:
            raise ApiError("Authentication failed - no token received")

        if role == 'student' and user.get('role') != 'student':
            raise ValidationError("This portal is for students only")

        logger.info(f"{role} login succeeded")
        return token, user

    def validate_admin_signup(self, form):
        """Check the signup form before anything is sent"""
        required = ['firstName', 'lastName', 'email', 'password', 'confirmPassword', 'adminCode']
        missing = [field for field in required if not (form.get(field) or '').strip()]
        if missing:
            raise ValidationError("Please fill in all required fields")
        if form['password'] != form['confirmPassword']:
            raise ValidationError("Passwords don't match")
        if len(form['password']) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    def register_admin(self, client, form):
        self.validate_admin_signup(form)
        payload = {
            'firstName': form['firstName'].strip(),
            'lastName': form['lastName'].strip(),
            'email': form['email'].strip(),
            'phone': (form.get('phone') or '').strip(),
            'password': form['password'],
            'adminCode': form['adminCode'].strip(),
        }
        response = client.post('/api/auth/register/admin', json=payload, default_error='Registration failed')
        check_success(response, 'Registration failed')
        logger.info("Registered new admin account")
        return response

    def fetch_profile(self, client, role):
        """Current user's profile: /api/student/profile for students, /api/auth/me otherwise"""
        if role == 'student':
            payload = client.get('/api/student/profile', default_error='Failed to load profile')
            check_success(payload, 'Failed to load profile')
            return unwrap_data(payload) or {}

        payload = client.get('/api/auth/me', default_error='Failed to fetch profile')
        check_success(payload, 'Failed to fetch profile')
        data = unwrap_data(payload) or {}
        return data.get('user', data) if isinstance(data, dict) else {}
