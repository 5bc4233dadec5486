"""
Core state shared across components
"""
from kerkerker.config.settings import AppConfig
from .monitoring import LogBuffer, LogBufferHandler, install_log_buffer

# Captured log entries served by /api/logs
system_logs = LogBuffer(maxlen=AppConfig.MAX_LOG_ENTRIES)

__all__ = ['LogBuffer', 'LogBufferHandler', 'install_log_buffer', 'system_logs']
