"""
Auth Component
Login, logout, admin signup and profile pages for every role
"""
from .routes import auth_bp, init_auth
from .service import AuthService

__all__ = ['auth_bp', 'init_auth', 'AuthService']
