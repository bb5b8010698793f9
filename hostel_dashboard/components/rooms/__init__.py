"""
Rooms Component
"""
from .routes import init_rooms, rooms_bp
from .service import RoomsService

__all__ = ['rooms_bp', 'init_rooms', 'RoomsService']
