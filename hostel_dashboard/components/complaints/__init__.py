"""
Complaints Component
"""
from .routes import complaints_bp, init_complaints
from .service import ComplaintsService

__all__ = ['complaints_bp', 'init_complaints', 'ComplaintsService']
