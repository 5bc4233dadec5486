"""
Application configuration settings
"""
import os

from dotenv import load_dotenv

load_dotenv()


class AppConfig:
    """Centralized configuration, read from the environment"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 3000))

    APP_NAME = os.environ.get('NEXT_PUBLIC_APP_NAME') or os.environ.get('APP_NAME') or '临客'

    # MongoDB
    MONGODB_URI = os.environ.get('MONGODB_URI')
    MONGODB_DB_NAME = os.environ.get('MONGODB_DB_NAME', 'kerkerker')
    MONGODB_TIMEOUT_MS = int(os.environ.get('MONGODB_TIMEOUT_MS', 5000))

    # Danmaku provider
    DANMAKU_API_URL = os.environ.get('DANMAKU_API_URL', 'https://api.dandanplay.net')
    DANMAKU_TIMEOUT = float(os.environ.get('DANMAKU_TIMEOUT', 10))

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '100 per minute')

    # Remote images are allowed from any host
    IMAGE_REMOTE_PATTERNS = [
        {'protocol': 'https', 'hostname': '**'},
        {'protocol': 'http', 'hostname': '**'},
    ]

    # UI settings
    MAX_LOG_ENTRIES = 1000

    @staticmethod
    def image_sources(patterns):
        """Translate remote image patterns into CSP img-src sources"""
        sources = []
        for pattern in patterns:
            protocol = pattern.get('protocol', 'https')
            hostname = pattern.get('hostname', '**')
            if hostname == '**':
                sources.append(f'{protocol}:')
            else:
                sources.append(f"{protocol}://{hostname.replace('**', '*')}")
        return sources
