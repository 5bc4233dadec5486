"""
Database Settings Service
MongoDB connectivity snapshot and on-demand connection test
"""
import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from .diagnostics import get_error_suggestions

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = 'kerkerker'

_CREDENTIALS = re.compile(r'^(mongodb(?:\+srv)?://)([^:@/]+):([^@/]*)@')
# Driver decoration appended after the per-server error
_DRIVER_DETAILS = re.compile(r' \(configured timeouts:|, Timeout: ')


class DatabaseConfigError(RuntimeError):
    """MONGODB_URI is missing"""

    def __init__(self):
        super().__init__('MONGODB_URI 环境变量未设置')


def sanitize_uri(uri):
    """Mask the password of a connection string"""
    if not uri:
        return uri
    return _CREDENTIALS.sub(r'\1\2:****@', uri)


def describe_error(exc):
    """Reduce a driver exception to the underlying server error

    Server selection failures carry the configured timeouts and the whole
    topology description after the real cause, e.g.
    ``host:27017: [Errno 111] Connection refused (configured timeouts: ...), Timeout: 5.0s, ...``.
    """
    message = str(exc)
    match = _DRIVER_DETAILS.search(message)
    if match:
        message = message[:match.start()].strip()
    if not message and isinstance(exc, ServerSelectionTimeoutError):
        return 'Server selection timed out'
    return message or str(exc)


def _now():
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ServerInfo:
    version: str
    git_version: Optional[str] = None

    def to_dict(self):
        data = {'version': self.version}
        if self.git_version:
            data['gitVersion'] = self.git_version
        return data


@dataclass
class DatabaseStatus:
    """Connectivity snapshot shown by the admin panel"""
    connected: bool
    latency: int = 0
    database: Optional[str] = None
    collections: Optional[List[str]] = None
    server_info: Optional[ServerInfo] = None
    uri: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = field(default_factory=_now)

    @property
    def collection_count(self):
        if self.collections is None:
            return None
        return len(self.collections)

    def to_dict(self) -> Dict:
        data = {
            'connected': self.connected,
            'latency': self.latency,
            'timestamp': self.timestamp,
        }
        if self.database:
            data['database'] = self.database
        if self.collections is not None:
            data['collections'] = list(self.collections)
            data['collectionCount'] = self.collection_count
        if self.server_info:
            data['serverInfo'] = self.server_info.to_dict()
        if self.uri:
            data['uri'] = self.uri
        if self.error:
            data['error'] = self.error
        return data


class DatabaseSettingsService:
    """Service for the database settings tab

    Reads only: the panel inspects the database, it never writes to it.
    """

    def __init__(self, uri=None, db_name=DEFAULT_DB_NAME, timeout_ms=5000,
                 client_factory=MongoClient):
        self.uri = uri
        self.db_name = db_name or DEFAULT_DB_NAME
        self.timeout_ms = timeout_ms
        self.client_factory = client_factory
        self._client = None

    def _require_uri(self):
        if not self.uri:
            raise DatabaseConfigError()
        return self.uri

    def _connect(self):
        return self.client_factory(
            self._require_uri(),
            serverSelectionTimeoutMS=self.timeout_ms,
            connectTimeoutMS=self.timeout_ms,
        )

    def get_client(self):
        """Cached client shared by status requests"""
        if self._client is None:
            self._client = self._connect()
        return self._client

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    @staticmethod
    def _ping(client):
        started = time.perf_counter()
        client.admin.command('ping')
        return int(round((time.perf_counter() - started) * 1000))

    def get_status(self) -> DatabaseStatus:
        """Get current connection status"""
        try:
            client = self.get_client()
            latency = self._ping(client)
            collections = sorted(client[self.db_name].list_collection_names())
            info = client.server_info()
            return DatabaseStatus(
                connected=True,
                latency=latency,
                database=self.db_name,
                collections=collections,
                server_info=ServerInfo(
                    version=info.get('version', 'unknown'),
                    git_version=info.get('gitVersion'),
                ),
                uri=sanitize_uri(self.uri),
            )
        except (PyMongoError, DatabaseConfigError, ValueError) as e:
            logger.warning(f'Database status check failed: {e}')
            self.close()
            return self.failed_status(describe_error(e))

    def failed_status(self, error) -> DatabaseStatus:
        """Disconnected snapshot carrying an error message"""
        return DatabaseStatus(
            connected=False,
            latency=0,
            database=self.db_name,
            uri=sanitize_uri(self.uri),
            error=error,
        )

    def test_connection(self) -> Dict:
        """Check connectivity with a fresh client and measure latency"""
        client = None
        try:
            client = self._connect()
            latency = self._ping(client)
            logger.info(f'Database connection test succeeded ({latency}ms)')
            return {'success': True, 'latency': latency, 'timestamp': _now()}
        except (PyMongoError, DatabaseConfigError, ValueError) as e:
            logger.warning(f'Database connection test failed: {e}')
            return {'success': False, 'latency': 0, 'error': describe_error(e), 'timestamp': _now()}
        finally:
            if client is not None:
                client.close()

    def panel_state(self, status, last_error=None, toast=None):
        """Template context for the status panel

        Suggestions are only offered while disconnected.
        """
        suggestion = get_error_suggestions(last_error) if last_error else None
        show_suggestions = bool(status is not None and not status.connected and suggestion)
        return {
            'status': status,
            'error_suggestion': suggestion if show_suggestions else None,
            'toast': toast,
            'db_name': self.db_name,
        }
