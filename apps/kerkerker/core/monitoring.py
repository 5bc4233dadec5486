"""
Log capture for the admin console
"""
import logging
from collections import deque
from datetime import datetime


class LogBuffer:
    """Bounded store of recent log entries"""

    def __init__(self, maxlen=1000):
        self.entries = deque(maxlen=maxlen)

    def __len__(self):
        return len(self.entries)

    def append(self, entry):
        self.entries.append(entry)

    def clear(self):
        self.entries.clear()

    def query(self, level='ALL', limit=50):
        """Most recent entries, oldest first; ``level`` 'ALL' keeps every level"""
        level = (level or 'ALL').upper()
        if level == 'ALL':
            logs = list(self.entries)
        else:
            logs = [entry for entry in self.entries if entry['level'] == level]
        if limit and limit > 0:
            logs = logs[-limit:]
        return logs


class LogBufferHandler(logging.Handler):
    """Logging handler that appends records to a LogBuffer"""

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


def install_log_buffer(buffer, logger_name='kerkerker', level=logging.INFO):
    """Attach a LogBufferHandler to the package logger once"""
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers:
        if isinstance(handler, LogBufferHandler) and handler.buffer is buffer:
            return handler
    handler = LogBufferHandler(buffer, level=level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler
