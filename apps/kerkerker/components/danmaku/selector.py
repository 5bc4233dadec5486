"""
Danmaku Selector
Search → anime → episode → comments flow behind the selector dropdown.
Each stage resets everything downstream of it.
"""
import logging

from .service import DanmakuError, extract_search_keyword

logger = logging.getLogger(__name__)

MSG_NO_RESULTS = '未找到匹配的动漫'
MSG_SEARCH_FAILED = '搜索失败，请重试'
MSG_NO_EPISODES = '未找到剧集信息'
MSG_EPISODES_FAILED = '获取剧集失败'
MSG_DANMAKU_FAILED = '加载弹幕失败'


class DanmakuSelector:
    """State of one selector interaction"""

    def __init__(self, service):
        self.service = service
        self.is_open = False
        self.search_keyword = ''
        self.animes = []
        self.selected_anime = None
        self.episodes = []
        self.selected_episode = None
        self.loaded_count = None
        self.error = None
        self.show_anime_list = False

    def open(self, video_title=''):
        """Open the dropdown, seeding the keyword from the video title"""
        self.is_open = True
        if video_title and not self.search_keyword:
            self.search_keyword = extract_search_keyword(video_title)

    def close(self):
        self.is_open = False

    def search(self):
        if not self.search_keyword.strip():
            return

        self.error = None
        self.animes = []
        self.selected_anime = None
        self.episodes = []
        self.selected_episode = None
        self.loaded_count = None

        try:
            results = self.service.search_anime(self.search_keyword)
        except DanmakuError as e:
            logger.warning(f'Danmaku search failed: {e}')
            self.error = MSG_SEARCH_FAILED
            return

        if not results:
            self.error = MSG_NO_RESULTS
        else:
            self.animes = list(results)
            self.show_anime_list = True

    def find_anime(self, anime_id):
        for anime in self.animes:
            if anime.anime_id == anime_id:
                return anime
        return None

    def select_anime(self, anime):
        self.selected_anime = anime
        self.show_anime_list = False
        self.episodes = []
        self.selected_episode = None
        self.loaded_count = None
        self.error = None

        try:
            bangumi = self.service.get_bangumi(anime.anime_id)
        except DanmakuError as e:
            logger.warning(f'Loading episodes of {anime.anime_id} failed: {e}')
            self.error = MSG_EPISODES_FAILED
            return

        if bangumi and bangumi.episodes:
            self.episodes = list(bangumi.episodes)
            self.selected_episode = self.episodes[0]
        else:
            self.error = MSG_NO_EPISODES

    def select_episode(self, episode_id):
        for episode in self.episodes:
            if episode.episode_id == episode_id:
                self.selected_episode = episode
                return episode
        raise ValueError(f'Unknown episode: {episode_id}')

    def load_danmaku(self, on_load=None):
        """Fetch comments of the selected episode and hand them to ``on_load``

        Returns the loaded items, or None when nothing was loaded.
        """
        if self.selected_episode is None:
            return None

        self.error = None
        try:
            items = self.service.get_comments(self.selected_episode.episode_id)
        except DanmakuError as e:
            logger.warning(f'Loading danmaku of {self.selected_episode.episode_id} failed: {e}')
            self.error = MSG_DANMAKU_FAILED
            return None

        self.loaded_count = len(items)
        if on_load is not None:
            on_load(items)
        return items
