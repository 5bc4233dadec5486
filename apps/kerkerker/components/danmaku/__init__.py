"""
Danmaku Component
Provider search, episode selection and comment loading for the player
"""
from .routes import danmaku_bp, init_danmaku
from .selector import DanmakuSelector
from .service import DanmakuService, extract_search_keyword

__all__ = ['danmaku_bp', 'init_danmaku', 'DanmakuSelector', 'DanmakuService', 'extract_search_keyword']
