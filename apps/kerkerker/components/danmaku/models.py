"""
Danmaku Data Models
Value snapshots of the provider's search, bangumi and comment payloads
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Provider comment modes
MODE_BOTTOM = 4
MODE_TOP = 5

DEFAULT_COLOR = 0xFFFFFF


@dataclass(frozen=True)
class Anime:
    """Anime search result"""
    anime_id: int
    anime_title: str
    image_url: str = ''
    episode_count: int = 0
    type_description: str = ''

    @classmethod
    def from_dict(cls, data: Dict) -> 'Anime':
        return cls(
            anime_id=int(data.get('animeId') or 0),
            anime_title=data.get('animeTitle') or '',
            image_url=data.get('imageUrl') or '',
            episode_count=int(data.get('episodeCount') or 0),
            type_description=data.get('typeDescription') or '',
        )

    def to_dict(self) -> Dict:
        return {
            'animeId': self.anime_id,
            'animeTitle': self.anime_title,
            'imageUrl': self.image_url,
            'episodeCount': self.episode_count,
            'typeDescription': self.type_description,
        }


@dataclass(frozen=True)
class Episode:
    """Single episode of a bangumi"""
    episode_id: int
    episode_number: str
    episode_title: str = ''

    @classmethod
    def from_dict(cls, data: Dict) -> 'Episode':
        return cls(
            episode_id=int(data.get('episodeId') or 0),
            episode_number=str(data.get('episodeNumber') or ''),
            episode_title=data.get('episodeTitle') or '',
        )

    def to_dict(self) -> Dict:
        return {
            'episodeId': self.episode_id,
            'episodeNumber': self.episode_number,
            'episodeTitle': self.episode_title,
        }


@dataclass(frozen=True)
class Bangumi:
    """Anime series record with its episode list"""
    anime_id: int
    anime_title: str
    image_url: str = ''
    episodes: List[Episode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Bangumi':
        return cls(
            anime_id=int(data.get('animeId') or 0),
            anime_title=data.get('animeTitle') or '',
            image_url=data.get('imageUrl') or '',
            episodes=[Episode.from_dict(item) for item in data.get('episodes') or []],
        )

    def to_dict(self) -> Dict:
        return {
            'animeId': self.anime_id,
            'animeTitle': self.anime_title,
            'imageUrl': self.image_url,
            'episodes': [episode.to_dict() for episode in self.episodes],
        }


@dataclass(frozen=True)
class DanmakuItem:
    """A single scrolling comment"""
    text: str
    time: float
    mode: str = 'scroll'
    color: str = '#ffffff'

    @classmethod
    def from_comment(cls, comment: Dict) -> Optional['DanmakuItem']:
        """Parse a provider comment ``{'p': 'time,mode,color,uid', 'm': text}``

        Returns None for comments without a usable ``p`` attribute.
        """
        parts = (comment.get('p') or '').split(',')
        try:
            time = float(parts[0])
            mode_code = int(parts[1]) if len(parts) > 1 else 1
            color_code = int(parts[2]) if len(parts) > 2 else DEFAULT_COLOR
        except ValueError:
            return None

        if mode_code == MODE_BOTTOM:
            mode = 'bottom'
        elif mode_code == MODE_TOP:
            mode = 'top'
        else:
            mode = 'scroll'

        return cls(
            text=comment.get('m') or '',
            time=time,
            mode=mode,
            color=f'#{color_code & 0xFFFFFF:06x}',
        )

    def to_dict(self) -> Dict:
        return {
            'text': self.text,
            'time': self.time,
            'mode': self.mode,
            'color': self.color,
        }
