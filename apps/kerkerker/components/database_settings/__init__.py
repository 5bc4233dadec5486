"""
Database Settings Component
MongoDB connectivity status, connection test and error diagnostics
"""
from .diagnostics import ErrorSuggestion, get_error_suggestions
from .routes import database_settings_bp, init_database_settings
from .service import DatabaseSettingsService, DatabaseStatus, sanitize_uri

__all__ = [
    'database_settings_bp',
    'init_database_settings',
    'DatabaseSettingsService',
    'DatabaseStatus',
    'ErrorSuggestion',
    'get_error_suggestions',
    'sanitize_uri',
]
