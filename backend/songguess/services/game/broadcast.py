from typing import Any, Dict, List, Optional, Sequence

from songguess.models import LeaderboardEntry
from .registry import PlayerRegistry


class Broadcaster:
    """Fans game events out over Socket.IO, to one client or to everyone."""

    def __init__(self, socketio, registry: PlayerRegistry, catalog_length: int, namespace: str = '/'):
        self.socketio = socketio
        self.registry = registry
        self.catalog_length = catalog_length
        self.namespace = namespace

    def _emit(self, event: str, args: Sequence[Any], to: Optional[str]) -> None:
        # Several positional arguments travel as a tuple so clients receive them unpacked
        if not args:
            self.socketio.emit(event, to=to, namespace=self.namespace)
        elif len(args) == 1:
            self.socketio.emit(event, args[0], to=to, namespace=self.namespace)
        else:
            self.socketio.emit(event, tuple(args), to=to, namespace=self.namespace)

    def to_client(self, sid: str, event: str, *args) -> None:
        self._emit(event, args, to=sid)

    def to_all(self, event: str, *args) -> None:
        self._emit(event, args, to=None)

    def scoreboard(self) -> List[Dict[str, Any]]:
        # sorted() is stable, so equal scores stay in registration order
        sessions = sorted(self.registry.snapshot(), key=lambda s: s.points, reverse=True)
        return [s.to_dict(self.catalog_length) for s in sessions]

    def broadcast_scoreboard(self) -> None:
        self.to_all('scoreboard', self.scoreboard())

    def send_top_scores(self, sid: str, entries: List[LeaderboardEntry]) -> None:
        self.to_client(sid, 'topScores', [e.to_dict() for e in entries])

    def broadcast_top_scores(self, entries: List[LeaderboardEntry]) -> None:
        self.to_all('topScores', [e.to_dict() for e in entries])
