"""
System Logs Service
Reads the in-memory buffer of recent dashboard log entries
"""
import logging

from ...core import system_logs
from .. import register_component

logger = logging.getLogger(__name__)

LEVELS = ('ALL', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
DEFAULT_LIMIT = 50


@register_component('system_logs', pages={
    'admin': ('System Logs', 'system_logs.logs_page'),
})
class SystemLogsService:
    """Service for System Logs component"""

    def __init__(self, buffer=None):
        self.buffer = system_logs if buffer is None else buffer

    def get_logs(self, level_filter='ALL', limit=DEFAULT_LIMIT):
        """Most recent entries, oldest first, optionally filtered by level"""
        logs = list(self.buffer)

        if level_filter and level_filter != 'ALL':
            logs = [log for log in logs if log.get('level') == level_filter]

        if limit and len(logs) > limit:
            logs = logs[-limit:]

        return logs

    @staticmethod
    def parse_limit(value):
        try:
            limit = int(value)
        except (TypeError, ValueError):
            return DEFAULT_LIMIT
        return max(limit, 0)
