import threading
from typing import Dict, List, Optional

from songguess.models import PlayerSession


class PlayerRegistry:
    """Connection id -> PlayerSession for every connected, registered client.

    Insertion order is registration order; the scoreboard relies on it to
    keep ties stable.
    """

    def __init__(self):
        self._sessions: Dict[str, PlayerSession] = {}
        self._lock = threading.RLock()

    def register(self, sid: str, name: str) -> PlayerSession:
        with self._lock:
            # Re-registering the same connection starts over at the end of the order
            self._sessions.pop(sid, None)
            session = PlayerSession(name=name)
            self._sessions[sid] = session
            return session

    def get(self, sid: str) -> Optional[PlayerSession]:
        return self._sessions.get(sid)

    def remove(self, sid: str) -> Optional[PlayerSession]:
        with self._lock:
            return self._sessions.pop(sid, None)

    def snapshot(self) -> List[PlayerSession]:
        with self._lock:
            return list(self._sessions.values())

    def __contains__(self, sid):
        return sid in self._sessions

    def __len__(self):
        return len(self._sessions)
