"""
Notices Component
"""
from .routes import init_notices, notices_bp
from .service import NoticesService

__all__ = ['notices_bp', 'init_notices', 'NoticesService']
