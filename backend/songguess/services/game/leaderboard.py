import json
import logging
import os
import tempfile
import threading
from typing import List

from songguess.models import LeaderboardEntry

MAX_LEADERBOARD_SIZE = 10


class LeaderboardStore:
    """Persisted all-time top list backed by a small JSON file.

    Entries are kept sorted by points, highest first. A new score is
    inserted ahead of the first entry it strictly beats, so equal scores
    already on the board keep their place. Names are never merged: a
    returning player gets a new entry.
    """

    def __init__(self, path: str, size: int = 10, logger=None):
        self.path = path
        self.size = max(1, min(size, MAX_LEADERBOARD_SIZE))
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def load(self) -> List[LeaderboardEntry]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            self.logger.warning(f"[leaderboard-read-fail] path={self.path} error={exc}")
            return []
        if not isinstance(raw, list):
            self.logger.warning(f"[leaderboard-read-fail] path={self.path} error=not a list")
            return []
        entries = []
        for item in raw:
            try:
                entries.append(LeaderboardEntry(name=str(item['name']), points=int(item['points'])))
            except (KeyError, TypeError, ValueError):
                self.logger.warning(f"[leaderboard-skip] malformed entry {item!r}")
        return entries[:self.size]

    def save(self, entries: List[LeaderboardEntry]) -> None:
        # Written beside the target and swapped in, so a failed write keeps the old board
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix='.leaderboard-', suffix='.tmp', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump([e.to_dict() for e in entries], f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise

    def update(self, name: str, points: int) -> List[LeaderboardEntry]:
        """Offer a score to the board and return the resulting list.

        The file is only rewritten when the score actually made the board.
        """
        with self._lock:
            entries = self.load()
            candidate = LeaderboardEntry(name=name, points=points)
            inserted = False
            for i, entry in enumerate(entries):
                if points > entry.points:
                    entries.insert(i, candidate)
                    inserted = True
                    break
            if not inserted and len(entries) < self.size:
                entries.append(candidate)
                inserted = True
            entries = entries[:self.size]
            if inserted:
                self.logger.info(f"[leaderboard-insert] name={name} points={points}")
                try:
                    self.save(entries)
                except OSError as exc:
                    self.logger.warning(f"[leaderboard-write-fail] path={self.path} error={exc}")
            return entries

    def reset(self) -> None:
        with self._lock:
            self.save([])
