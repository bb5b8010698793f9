"""
System Logs Component
"""
from .routes import init_system_logs, system_logs_bp
from .service import SystemLogsService

__all__ = ['system_logs_bp', 'SystemLogsService', 'init_system_logs']
