"""
System Logs Service
"""
from kerkerker.core import system_logs


class SystemLogsService:
    """Service for System Logs component"""

    def __init__(self, buffer=system_logs):
        self.buffer = buffer

    def get_logs(self, level_filter='ALL', limit=50):
        return self.buffer.query(level=level_filter, limit=limit)
