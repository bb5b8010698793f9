"""
Page routes that sit outside the components
"""
from .main_routes import main_bp

__all__ = ['main_bp']
