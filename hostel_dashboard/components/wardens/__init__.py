"""
Warden Management Component
"""
from .routes import init_wardens, wardens_bp
from .service import WardensService

__all__ = ['wardens_bp', 'init_wardens', 'WardensService']
