"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import threading
from typing import Optional

from src.api.models import (
    ClearHistoryResponse,
    ClickRequest,
    CreateSessionRequest,
    HistoryEntry,
    LegalDestinationsRequest,
    LegalDestinationsResponse,
    LoadResponse,
    ModeRequest,
    MoveRequest,
    MoveResponse,
    PlayerRequest,
    SessionResponse,
)
from src.chess.game import GameSession, MoveScheduler
from src.chess.snapshot import GameHistorySnapshot
from src.chess.square import Square
from src.core.config import AppConfig
from src.core.exceptions import SessionNotFoundError
from src.core.logging import get_logger
from src.core.models import SnapshotModel
from src.db.repository import SnapshotRepository

logger = get_logger(__name__)


class ChessService:
    """Orchestration of layers for chess game. Live sessions are kept in memory, one per player."""

    def __init__(
        self,
        repository: SnapshotRepository,
        scheduler: Optional[MoveScheduler] = None,
        config: Optional[AppConfig] = None,
    ) -> None:
        self.repo = repository
        self.scheduler = scheduler
        self.config = config or AppConfig()
        self.sessions: dict[str, GameSession] = {}
        # automated moves arrive from the scheduler's thread: keep repository access sequential
        self._repo_lock = threading.RLock()

    # -- API routes logic ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """A player opens the game: start a fresh session for them."""
        session = GameSession.start(
            player_id=request.player_id,
            automated_opponent=request.automated_opponent,
            time_control=self.config.time_control_seconds,
            automated_move_delay=self.config.automated_move_delay,
            scheduler=self.scheduler,
            on_snapshot=self._store_snapshot,
        )
        self._discard_session(session.player_id)
        self.sessions[session.player_id] = session
        logger.info(
            "session created",
            player_id=session.player_id,
            session_id=session.session_id,
            automated_opponent=session.automated_opponent,
        )
        return self._create_session_response(session)

    def get_session(self, request: PlayerRequest) -> SessionResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to see if the automated opponent has answered for instance.
        """
        return self._create_session_response(self._fetch_session(request.player_id))

    def click(self, request: ClickRequest) -> MoveResponse:
        """The player clicked a square (selecting a piece, or picking its destination)."""
        session = self._fetch_session(request.player_id)
        accepted = session.click(Square.from_algebraic(request.square))
        return MoveResponse(
            accepted=accepted, session=self._create_session_response(session)
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. An illegal move is answered with accepted=False, not with an error."""
        session = self._fetch_session(request.player_id)
        accepted = session.attempt_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        return MoveResponse(
            accepted=accepted, session=self._create_session_response(session)
        )

    def legal_destinations(
        self, request: LegalDestinationsRequest
    ) -> LegalDestinationsResponse:
        """Squares to highlight: for the given square, or else for the currently selected piece."""
        session = self._fetch_session(request.player_id)
        from_square = (
            Square.from_algebraic(request.square) if request.square else session.selection
        )
        destinations = session.legal_destinations(from_square)
        return LegalDestinationsResponse(
            player_id=request.player_id,
            from_square=from_square.to_algebraic() if from_square else None,
            destinations=[square.to_algebraic() for square in destinations],
        )

    def new_game(self, request: PlayerRequest) -> SessionResponse:
        session = self._fetch_session(request.player_id)
        session.new_game()
        return self._create_session_response(session)

    def set_mode(self, request: ModeRequest) -> SessionResponse:
        """Switch between playing the computer and playing another person. Always starts a new game."""
        session = self._fetch_session(request.player_id)
        if request.automated_opponent:
            session.play_against_computer()
        else:
            session.play_against_player()
        return self._create_session_response(session)

    def load_latest(self, request: PlayerRequest) -> LoadResponse:
        """Resume the player's most recent snapshot. found=False if there is nothing to resume."""
        session = self._fetch_session(request.player_id)
        found = session.load_latest_snapshot(self)
        return LoadResponse(found=found, session=self._create_session_response(session))

    def list_history(self, request: PlayerRequest) -> list[HistoryEntry]:
        """Recorded snapshots of the player, oldest first."""
        with self._repo_lock:
            snapshots = self.repo.list_snapshots(request.player_id)
        return [self._create_history_entry(snapshot) for snapshot in snapshots]

    def clear_history(self, request: PlayerRequest) -> ClearHistoryResponse:
        """Forget every recorded snapshot of the player. The live session is left as it is."""
        with self._repo_lock:
            deleted = self.repo.clear_history(request.player_id)
        logger.info("history cleared", player_id=request.player_id, deleted=deleted)
        return ClearHistoryResponse(player_id=request.player_id, deleted=deleted)

    def tick_clock(self, request: PlayerRequest) -> SessionResponse:
        """Host calls this once per second. When time runs out the session starts a new game."""
        session = self._fetch_session(request.player_id)
        session.tick_clock()
        return self._create_session_response(session)

    def end_session(self, request: PlayerRequest) -> None:
        """Player left: forget the session and drop its pending automated move."""
        if self._discard_session(request.player_id):
            logger.info("session ended", player_id=request.player_id)

    def shutdown(self) -> None:
        """Host is stopping: close every live session so no automated move fires afterwards."""
        for player_id in list(self.sessions):
            self._discard_session(player_id)
        logger.info("chess service stopped")

    def latest_snapshot(self, player_id: str) -> SnapshotModel | None:
        """SnapshotHistory handed to the sessions (the session lock is always taken before the repository lock)."""
        with self._repo_lock:
            return self.repo.latest_snapshot(player_id)

    # -- Internal helpers --
    def _store_snapshot(self, snapshot: GameHistorySnapshot) -> None:
        """Persistence collaborator of the GameSession."""
        with self._repo_lock:
            self.repo.append_snapshot(snapshot.to_model())

    def _create_session_response(self, session: GameSession) -> SessionResponse:
        """Convert the live session into a SessionResponse."""
        return SessionResponse(
            session_id=session.session_id,
            player_id=session.player_id,
            active_color=session.active_color,
            board=session.board.to_grid(),
            selected_square=(
                session.selection.to_algebraic() if session.selection else None
            ),
            automated_opponent=session.automated_opponent,
            time_remaining=session.clock.display(),
        )

    def _create_history_entry(self, snapshot: SnapshotModel) -> HistoryEntry:
        return HistoryEntry(
            session_id=snapshot.session_id,
            timestamp=snapshot.timestamp,
            player_id=snapshot.player_id,
        )

    def _discard_session(self, player_id: str) -> bool:
        """Close and forget the player's live session, if any. Its pending automated move never lands."""
        session = self.sessions.pop(player_id, None)
        if session is None:
            return False
        session.close()
        return True

    def _fetch_session(self, player_id: str) -> GameSession:
        """Attempt to find the player's session and raise error if it fails."""
        session = self.sessions.get(player_id)
        if session is None:
            raise SessionNotFoundError(f"No session for {player_id=}.")
        return session
