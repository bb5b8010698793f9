"""
Room Management Component
"""
from .routes import init_room_management, room_management_bp
from .service import RoomManagementService

__all__ = ['room_management_bp', 'init_room_management', 'RoomManagementService']
