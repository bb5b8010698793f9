"""
Leave Component
"""
from .routes import init_leave, leave_bp
from .service import LeaveService

__all__ = ['leave_bp', 'init_leave', 'LeaveService']
