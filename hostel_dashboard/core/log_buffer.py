"""
In-memory log buffer

Mirrors dashboard log records into the shared `system_logs` deque so the
system logs component can serve recent entries without touching disk.
"""
import logging
from datetime import datetime


class DequeLogHandler(logging.Handler):
    """Logging handler that appends entries to a bounded deque"""

    def __init__(self, buffer, level=logging.INFO):
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record):
        try:
            self.buffer.append({
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            })
        except Exception:
            self.handleError(record)


def install_log_buffer(buffer, logger_name='hostel_dashboard', level=logging.INFO):
    """Attach a DequeLogHandler to the package logger once"""
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        if isinstance(handler, DequeLogHandler) and handler.buffer is buffer:
            return handler
    handler = DequeLogHandler(buffer, level=level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler
