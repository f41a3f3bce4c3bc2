import json
from typing import List, Optional, Sequence

from songguess.models import HintLevelEntry, SongEntry


DEFAULT_SONGS = [
    SongEntry(url='/songs/song1.mp3', title='Billie jean'),
    SongEntry(url='/songs/song2.mp3', title='Never gonna give you up'),
    SongEntry(url='/songs/song3.mp3', title='Somewhere I Belong'),
    SongEntry(url='/songs/song4.mp3', title='Blinding Lights'),
]


def load_catalog(path: Optional[str] = None) -> List[SongEntry]:
    """Load the ordered song catalog.

    Without a path the built-in catalog is used. A catalog file is a JSON
    array of ``{"url": ..., "title": ...}`` objects; anything else raises
    ``ValueError`` since the server cannot run without songs.
    """
    if not path:
        return list(DEFAULT_SONGS)
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    if not isinstance(raw, list) or not raw:
        raise ValueError(f'Song catalog {path} must be a non-empty JSON array')
    songs = []
    for item in raw:
        if not isinstance(item, dict) or not item.get('url') or not item.get('title'):
            raise ValueError(f'Invalid song catalog entry: {item!r}')
        songs.append(SongEntry(url=str(item['url']), title=str(item['title'])))
    return songs


class HintSchedule:
    """Fixed table of hint levels: level -> (snippet duration, points)."""

    def __init__(self, durations: Sequence[int], points: Sequence[int]):
        if len(durations) != len(points):
            raise ValueError('HINT_DURATIONS and HINT_POINTS must have the same length')
        if len(durations) < 2:
            raise ValueError('Hint schedule needs at least one playable level after level 0')
        self._levels = tuple(HintLevelEntry(duration=d, points=p) for d, p in zip(durations, points))

    def __len__(self):
        return len(self._levels)

    def __getitem__(self, level: int) -> HintLevelEntry:
        return self._levels[level]

    @property
    def max_level(self) -> int:
        return len(self._levels) - 1

    def clamp(self, level: int) -> int:
        return max(0, min(level, self.max_level))
