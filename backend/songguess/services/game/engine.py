import logging
from typing import List, Optional

from songguess.models import Finished, Playing, PlayerSession, RoundState, SongEntry
from .broadcast import Broadcaster
from .catalog import HintSchedule
from .leaderboard import LeaderboardStore
from .registry import PlayerRegistry


MSG_CORRECT = 'You guessed it!'
MSG_NEXT_SONG = 'Moving on to the next song'
MSG_FINISHED = 'Game over. You scored {points} points'
UNKNOWN_SENDER = 'Unknown'


class GameEngine:
    """Round and hint progression for every player session.

    Each player advances through the catalog on their own. Handlers act on
    the calling connection only and do nothing when the connection has no
    session or the player has already finished the catalog.
    """

    def __init__(
        self,
        registry: PlayerRegistry,
        songs: List[SongEntry],
        hints: HintSchedule,
        leaderboard: LeaderboardStore,
        broadcaster: Broadcaster,
        round_start_hint_level: int = 1,
        logger=None,
    ):
        self.registry = registry
        self.songs = songs
        self.hints = hints
        self.leaderboard = leaderboard
        self.broadcaster = broadcaster
        if not 0 <= round_start_hint_level <= hints.max_level:
            raise ValueError(
                f"ROUND_START_HINT_LEVEL must be between 0 and {hints.max_level}, got {round_start_hint_level}"
            )
        self.round_start_hint_level = round_start_hint_level
        self.logger = logger or logging.getLogger(__name__)

    # ---- state transitions ----

    def round_state(self, session: PlayerSession) -> RoundState:
        if session.round_index < len(self.songs):
            return Playing(
                round_index=session.round_index,
                song=self.songs[session.round_index],
                hint_level=session.hint_level,
            )
        return Finished(final_score=session.points)

    def _advance(self, session: PlayerSession) -> RoundState:
        session.round_index = min(session.round_index + 1, len(self.songs))
        session.hint_level = self.round_start_hint_level
        return self.round_state(session)

    def _playing(self, sid: str):
        session = self.registry.get(sid)
        if not session:
            return None, None
        state = self.round_state(session)
        if not isinstance(state, Playing):
            return session, None
        return session, state

    def _announce(self, sid: str, session: PlayerSession, state: RoundState, record_finish: bool) -> None:
        if isinstance(state, Playing):
            self.broadcaster.to_client(sid, 'round info', MSG_NEXT_SONG)
            self.broadcaster.to_client(sid, 'new hint', self.hints[state.hint_level].duration, False)
            return
        if record_finish:
            self.broadcaster.broadcast_top_scores(self.leaderboard.update(session.name, session.points))
        self.logger.info(f"[game-finished] sid={sid} name={session.name} points={session.points}")
        self.broadcaster.to_client(sid, 'round info', MSG_FINISHED.format(points=session.points))

    # ---- connection lifecycle ----

    def register(self, sid: str, name: str) -> PlayerSession:
        session = self.registry.register(sid, name)
        self.logger.info(f"[player-join] sid={sid} name={name}")
        self.broadcaster.broadcast_scoreboard()
        self.broadcaster.send_top_scores(sid, self.leaderboard.load())
        return session

    def disconnect(self, sid: str) -> None:
        session = self.registry.remove(sid)
        if session:
            self.logger.info(f"[player-leave] sid={sid} name={session.name} points={session.points}")
        self.broadcaster.broadcast_scoreboard()

    def chat(self, sid: str, text: str) -> None:
        session = self.registry.get(sid)
        sender = session.name if session else UNKNOWN_SENDER
        self.broadcaster.to_all('chat message', f"{sender}: {text}")

    # ---- player actions ----

    def play_snippet(self, sid: str) -> None:
        _, state = self._playing(sid)
        if not state:
            return
        self.broadcaster.to_client(sid, 'audio snippet', state.song.url, self.hints[state.hint_level].duration)

    def request_hint(self, sid: str) -> None:
        session, state = self._playing(sid)
        if not state:
            return
        if session.hint_level < self.hints.max_level:
            session.hint_level += 1
            self.broadcaster.to_client(sid, 'new hint', self.hints[session.hint_level].duration, False)
        else:
            self.broadcaster.to_client(sid, 'new hint', self.hints[session.hint_level].duration, True)

    def submit_guess(self, sid: str, text: str, round_index: Optional[int] = None) -> bool:
        """Resolve a guess for the player's current song.

        Matching is exact after case-folding; whitespace is significant.
        A guess tagged with a round other than the current one is stale
        and ignored. Returns True when the guess was correct.
        """
        session, state = self._playing(sid)
        if not state:
            return False
        if round_index is not None and round_index != state.round_index:
            self.logger.info(f"[guess-stale] sid={sid} round={round_index} current={state.round_index}")
            return False
        if text.lower() != state.song.title.lower():
            self.broadcaster.to_client(sid, 'wrong guess')
            return False

        awarded = self.hints[state.hint_level].points
        session.points += awarded
        self.logger.info(
            f"[guess-hit] sid={sid} name={session.name} round={state.round_index} "
            f"hint={state.hint_level} awarded={awarded} total={session.points}"
        )
        self.broadcaster.broadcast_top_scores(self.leaderboard.update(session.name, session.points))
        self.broadcaster.to_client(sid, 'round info', MSG_CORRECT)
        self._announce(sid, session, self._advance(session), record_finish=False)
        self.broadcaster.broadcast_scoreboard()
        return True

    def skip_song(self, sid: str) -> None:
        session, state = self._playing(sid)
        if not state:
            return
        self.logger.info(f"[skip] sid={sid} name={session.name} round={state.round_index}")
        self._announce(sid, session, self._advance(session), record_finish=True)
        self.broadcaster.broadcast_scoreboard()
