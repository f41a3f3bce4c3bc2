"""Game domain services: sessions, rounds, leaderboard and broadcasts.

Socket handlers and HTTP routes import from here, keeping transport
concerns separated from the round/hint state machine.
"""

from .broadcast import Broadcaster
from .catalog import HintSchedule, load_catalog
from .engine import GameEngine
from .leaderboard import LeaderboardStore
from .registry import PlayerRegistry

__all__ = [
    'Broadcaster',
    'GameEngine',
    'HintSchedule',
    'LeaderboardStore',
    'PlayerRegistry',
    'load_catalog',
]
