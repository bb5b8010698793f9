"""
Mess Menu Component
"""
from .routes import init_mess_menu, mess_menu_bp
from .service import MessMenuService, normalize_reviews

__all__ = ['mess_menu_bp', 'init_mess_menu', 'MessMenuService', 'normalize_reviews']
