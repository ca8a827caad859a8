"""
The GameSession will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn:
validating the move, updating the board, handing the turn to the other side, recording a snapshot,
and triggering the automated opponent (if playing against the computer).

It is the only object allowed to change its Board.
"""

import threading
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Self

from src.chess.board import Board
from src.chess.clock import DEFAULT_TIME_CONTROL, GameClock
from src.chess.moves import Move, is_legal, legal_destinations
from src.chess.pieces import Color
from src.chess.selector import RandomMoveSelector
from src.chess.snapshot import GameHistorySnapshot
from src.chess.square import Square
from src.core.ids import generate_id
from src.core.logging import get_logger
from src.core.models import SnapshotModel

logger = get_logger(__name__)


# --- COLLABORATORS ---
class Renderer(Protocol):
    """Draws the board. The domain layer never draws anything itself, and hands out a copy of its board."""

    def render(self, board: Board, active_color: Color) -> None: ...
    def highlight(self, squares: list[Square]) -> None: ...
    def clear_highlights(self) -> None: ...


class MoveScheduler(Protocol):
    """Runs an action once after a delay. Scheduling a key that is still pending replaces it."""

    def schedule(self, key: str, delay: float, action: Callable[[], None]) -> None: ...
    def cancel(self, key: str) -> None: ...


class SnapshotHistory(Protocol):
    """Just the part of the snapshot repository needed to resume a game"""

    def latest_snapshot(self, player_id: str) -> SnapshotModel | None: ...


SnapshotSink = Callable[[GameHistorySnapshot], None]


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    session_id: str
    player_id: str
    active_color: Color = Color.WHITE
    selection: Optional[Square] = None
    automated_opponent: bool = False
    automated_color: Color = Color.BLACK
    automated_move_delay: float = 1.0
    selector: RandomMoveSelector = field(default_factory=RandomMoveSelector)
    clock: GameClock = field(default_factory=GameClock)
    renderer: Optional[Renderer] = None
    scheduler: Optional[MoveScheduler] = None
    on_snapshot: Optional[SnapshotSink] = None
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.clock.on_expired = self.on_time_expired

    @classmethod
    def start(
        cls,
        player_id: Optional[str] = None,
        automated_opponent: bool = False,
        time_control: int = DEFAULT_TIME_CONTROL,
        **collaborators,
    ) -> Self:
        """A fresh session in the starting position, White to move."""
        return cls(
            board=Board.initial(),
            session_id=generate_id(),
            player_id=player_id or generate_id(),
            automated_opponent=automated_opponent,
            clock=GameClock(time_control),
            **collaborators,
        )

    def click(self, square: Square) -> bool:
        """
        Selection state machine for a player clicking on squares.
        -----

        * nothing selected + own piece -> select it (and highlight where it can go)
        * nothing selected + anything else -> ignored
        * something selected -> try to move there. The selection is cleared either way, even if the move was illegal.

        Returns True if a move was made.
        """
        with self._lock:
            if self.selection is None:
                piece = self.board.piece(square)
                if piece is not None and piece.color == self.active_color:
                    self.selection = square
                    self._highlight(self.legal_destinations())
                return False

            from_square = self.selection
            self.selection = None
            moved = self.attempt_move(from_square, square)
            self._clear_highlights()
            return moved

    def attempt_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move for the side to move.
        -----

        An illegal move is not an error: nothing changes and False is returned.
        """
        with self._lock:
            if not is_legal(self.board, self.active_color, from_square, to_square):
                logger.debug(
                    "move rejected",
                    session_id=self.session_id,
                    color=self.active_color.value,
                    from_square=(from_square.row, from_square.col),
                    to_square=(to_square.row, to_square.col),
                )
                return False

            self._apply_move(Move(from_square, to_square))
            return True

    def legal_destinations(self, square: Optional[Square] = None) -> list[Square]:
        """Squares the selected piece (or the piece on `square`) can move to."""
        with self._lock:
            from_square = square or self.selection
            if from_square is None:
                return []
            return legal_destinations(self.board, self.active_color, from_square)

    def play_automated_move(self, session_id: Optional[str] = None) -> Optional[Move]:
        """
        Let the automated opponent pick and play a move.
        ----

        `session_id` is the session the move was scheduled for. If a new game was started (or loaded) in the meantime,
        the move belongs to a board that no longer exists and is dropped.
        """
        with self._lock:
            if session_id is not None and session_id != self.session_id:
                logger.info(
                    "stale automated move dropped",
                    scheduled_for=session_id,
                    session_id=self.session_id,
                )
                return None

            if not self._is_automated_turn():
                return None

            move = self.selector.select_move(self.board, self.active_color)
            if move is None:
                # no legal moves: not checkmate/stalemate in this game, simply nothing happens
                logger.info(
                    "automated opponent has no legal move",
                    session_id=self.session_id,
                    color=self.active_color.value,
                )
                return None

            logger.info(
                "automated move",
                session_id=self.session_id,
                color=self.active_color.value,
                move=move.to_uci(),
            )
            self._apply_move(move)
            return move

    def new_game(self) -> None:
        """Back to the starting position with a new session id. A pending automated move is cancelled."""
        with self._lock:
            self._cancel_automated_move()
            self.board = Board.initial()
            self.session_id = generate_id()
            self.active_color = Color.WHITE
            self.selection = None
            self.clock.reset()
            logger.info(
                "new game",
                session_id=self.session_id,
                player_id=self.player_id,
                automated_opponent=self.automated_opponent,
            )
            self._clear_highlights()
            self._render()

    def play_against_computer(self) -> None:
        with self._lock:
            self.automated_opponent = True
            self.new_game()

    def play_against_player(self) -> None:
        with self._lock:
            self.automated_opponent = False
            self.new_game()

    def load_latest_snapshot(self, history: SnapshotHistory) -> bool:
        """
        Resume from the most recent snapshot recorded for this player.
        ----

        * Restores the board and the session id.
        * A snapshot does not record whose turn it is: the game always resumes with White to move.
        * Returns False (and leaves everything untouched) if there is no snapshot.
        """
        with self._lock:
            model = history.latest_snapshot(self.player_id)
            if model is None:
                logger.info("no snapshot to load", player_id=self.player_id)
                return False

            snapshot = GameHistorySnapshot.from_model(model)
            self._cancel_automated_move()
            self.board = snapshot.board
            self.session_id = snapshot.session_id
            self.active_color = Color.WHITE
            self.selection = None
            logger.info(
                "snapshot loaded",
                session_id=self.session_id,
                player_id=self.player_id,
                recorded_at=model.timestamp,
            )
            self._clear_highlights()
            self._render()
            if self._is_automated_turn():
                self._schedule_automated_move()
            return True

    def tick_clock(self) -> None:
        """One second of the game clock, under the session lock like every other state change."""
        with self._lock:
            self.clock.tick()

    def on_time_expired(self) -> None:
        """Hook for the game clock: time up means game over, and a new game starts."""
        with self._lock:
            logger.info("time expired", session_id=self.session_id)
            self.new_game()

    def close(self) -> None:
        """
        The session is abandoned (player left, or replaced by a new session).
        ----

        Cancels the pending automated move and detaches the collaborators, so an automated move
        that already fired and is waiting for the lock finds nothing to play and nothing to record.
        """
        with self._lock:
            self._cancel_automated_move()
            self.automated_opponent = False
            self.scheduler = None
            self.on_snapshot = None
            self.renderer = None
            logger.info("session closed", session_id=self.session_id, player_id=self.player_id)

    # -- PRIVATE HELPERS ---
    def _apply_move(self, move: Move) -> None:
        """
        1. update the board
        2. hand the turn to the opponent
        3. record a snapshot of the new position
        4. let the automated opponent answer (if it is its turn now)
        """
        self.board.move_piece(move)
        self.active_color = self.active_color.opponent
        self.selection = None
        logger.info(
            "move played",
            session_id=self.session_id,
            move=move.to_uci(),
            to_move=self.active_color.value,
        )
        self._record_snapshot()
        self._render()
        if self._is_automated_turn():
            self._schedule_automated_move()

    def _record_snapshot(self) -> None:
        if self.on_snapshot is None:
            return
        snapshot = GameHistorySnapshot.capture(
            self.session_id, self.board, self.player_id
        )
        self.on_snapshot(snapshot)

    def _is_automated_turn(self) -> bool:
        return self.automated_opponent and self.active_color == self.automated_color

    def _schedule_automated_move(self) -> None:
        """Without a scheduler (ex. in a script or test) the automated opponent answers straight away."""
        if self.scheduler is None:
            self.play_automated_move()
            return

        session_id = self.session_id
        self.scheduler.schedule(
            session_id,
            self.automated_move_delay,
            lambda: self.play_automated_move(session_id),
        )

    def _cancel_automated_move(self) -> None:
        if self.scheduler is not None:
            self.scheduler.cancel(self.session_id)

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.board.copy(), self.active_color)

    def _highlight(self, squares: list[Square]) -> None:
        if self.renderer is not None:
            self.renderer.highlight(squares)

    def _clear_highlights(self) -> None:
        if self.renderer is not None:
            self.renderer.clear_highlights()
