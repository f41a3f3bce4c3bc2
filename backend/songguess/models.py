from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SongEntry:
    url: str
    title: str


@dataclass(frozen=True)
class HintLevelEntry:
    duration: int  # seconds of audio for the snippet
    points: int  # awarded for a correct guess at this level


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    points: int

    def to_dict(self):
        return {'name': self.name, 'points': self.points}


@dataclass
class PlayerSession:
    """Mutable per-connection game state for one player."""
    name: str
    points: int = 0
    hint_level: int = 0
    round_index: int = 0

    def to_dict(self, catalog_length=None):
        data = {
            'name': self.name,
            'points': self.points,
            'round': self.round_index,
        }
        if catalog_length is not None:
            data['finished'] = self.round_index >= catalog_length
        return data


@dataclass(frozen=True)
class Playing:
    round_index: int
    song: SongEntry
    hint_level: int


@dataclass(frozen=True)
class Finished:
    final_score: int


RoundState = Union[Playing, Finished]
