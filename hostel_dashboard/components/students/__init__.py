"""
Student Management Component
"""
from .routes import init_students, students_bp
from .service import StudentsService

__all__ = ['students_bp', 'init_students', 'StudentsService']
