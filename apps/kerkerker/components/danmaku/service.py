"""
Danmaku Service
Client for the third-party danmaku provider (search / bangumi / comment)
"""
import logging
import re
from typing import Dict, List, Optional

import requests

from .models import Anime, Bangumi, DanmakuItem

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.dandanplay.net'

SEARCH_PATH = '/api/v2/search/anime'
BANGUMI_PATH = '/api/v2/bangumi/{anime_id}'
COMMENT_PATH = '/api/v2/comment/{episode_id}'

# [..] 【..】 (..) （..）
_BRACKETED = re.compile(r'\[[^\]]*\]|【[^】]*】|\([^)]*\)|（[^）]*）')
_TITLE_MARKS = re.compile(r'[《》]')


def extract_search_keyword(title):
    """Derive a search keyword from a video title by dropping bracketed parts"""
    if not title:
        return ''
    stripped = _TITLE_MARKS.sub('', _BRACKETED.sub(' ', title))
    keyword = ' '.join(stripped.split())
    return keyword or title.strip()


class DanmakuError(RuntimeError):
    """Base class for provider failures"""


class DanmakuRequestError(DanmakuError):
    """Network, HTTP or decoding failure"""

    def __init__(self, reason: str, endpoint: str) -> None:
        super().__init__(f'请求{endpoint}失败: {reason}')
        self.reason = reason
        self.endpoint = endpoint


class DanmakuAPIError(DanmakuError):
    """Provider answered with a business error"""

    def __init__(self, code: int, message: str, endpoint: str) -> None:
        super().__init__(f'API响应错误(code={code}, message={message}, endpoint={endpoint})')
        self.code = code
        self.message = message
        self.endpoint = endpoint


class DanmakuService:
    """Service for the danmaku component

    Thin wrapper over the provider's JSON API that reshapes payloads into
    value objects. No retries and no caching: every call hits the provider.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL,
                 session: Optional[requests.Session] = None,
                 timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, path: str, params: Optional[Dict] = None) -> Dict:
        url = f'{self.base_url}{path}'
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                headers={'Accept': 'application/json'},
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DanmakuRequestError(str(exc), url) from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise DanmakuRequestError('响应不是有效的JSON', url) from exc
        if not isinstance(payload, dict):
            raise DanmakuRequestError('响应格式不正确', url)

        code = payload.get('errorCode') or 0
        if payload.get('success') is False or code != 0:
            raise DanmakuAPIError(code, payload.get('errorMessage') or 'unknown', url)
        return payload

    def search_anime(self, keyword: str) -> List[Anime]:
        """Search anime by keyword"""
        keyword = (keyword or '').strip()
        if not keyword:
            return []
        payload = self._request(SEARCH_PATH, params={'keyword': keyword})
        animes = [Anime.from_dict(item) for item in payload.get('animes') or []]
        logger.info(f'Danmaku search "{keyword}": {len(animes)} results')
        return animes

    def get_bangumi(self, anime_id: int) -> Optional[Bangumi]:
        """Get bangumi details with its episode list"""
        payload = self._request(BANGUMI_PATH.format(anime_id=anime_id))
        data = payload.get('bangumi')
        if not data:
            return None
        return Bangumi.from_dict(data)

    def get_comments(self, episode_id: int, with_related: bool = True) -> List[DanmakuItem]:
        """Get every comment of an episode, ordered by time"""
        params = {
            'withRelated': 'true' if with_related else 'false',
            'chConvert': 0,
        }
        payload = self._request(COMMENT_PATH.format(episode_id=episode_id), params=params)

        items = []
        for comment in payload.get('comments') or []:
            item = DanmakuItem.from_comment(comment)
            if item is not None:
                items.append(item)
        items.sort(key=lambda item: item.time)

        logger.info(f'Loaded {len(items)} danmaku for episode {episode_id}')
        return items
