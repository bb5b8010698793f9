"""
Core services for dashboard components
"""
from collections import deque

from ..config.settings import DashboardConfig
from .drafts import DraftStore

# Global state - shared across all components
system_logs = deque(maxlen=DashboardConfig.MAX_LOG_ENTRIES)  # Keep last 1000 log entries
attendance_drafts = DraftStore(  # Unsaved attendance marks, keyed by browser session
    max_entries=DashboardConfig.MAX_ATTENDANCE_DRAFTS,
    max_age=DashboardConfig.ATTENDANCE_DRAFT_MAX_AGE,
)

__all__ = [
    'DraftStore',
    'system_logs',
    'attendance_drafts',
]
