"""Game session: turn order, status transitions, AI replies, undo, saving.

None of the public operations raise. Rejections come back as outcome objects
and collaborator failures are reported through the `notify` callback.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from gobang.agent.engine import AIEngine
from gobang.config import AI_MOVE_DELAY, AI_SEED, SAVE_DIR
from gobang.errors import InvalidMove, NoLegalMove, PersistenceFailure

from .board import BoardState, format_point, is_on_grid
from .record import GameRecordStore, GameSummary
from .snapshot import Snapshot
from .types import Difficulty, GameMode, GameStatus, Player, Point

logger = logging.getLogger(__name__)

# scheduler(delay_seconds, callback)
Scheduler = Callable[[float, Callable[[], None]], None]
# notify(level, message) with level one of "info", "warning", "error"
Notifier = Callable[[str, str], None]

AI_PLAYER = Player.WHITE
DEFAULT_DIFFICULTY = Difficulty.MEDIUM


def timer_scheduler(delay: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class ManualScheduler:
    """Queues callbacks until the owner drains and runs them."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay, callback))

    def drain(self) -> list[tuple[float, Callable[[], None]]]:
        pending, self.pending = self.pending, []
        return pending

    def run_pending(self) -> int:
        """Run everything queued so far, ignoring delays. Returns the count."""
        pending = self.drain()
        for _, callback in pending:
            callback()
        return len(pending)


def log_notifier(level: str, message: str) -> None:
    logger.log(logging.INFO if level == "info" else logging.WARNING, message)


@dataclass
class MoveOutcome:
    accepted: bool
    status: GameStatus
    winning_line: Optional[list[Point]] = None
    reason: Optional[str] = None


@dataclass
class UndoOutcome:
    accepted: bool
    reason: Optional[str] = None


def status_after(state: BoardState, winning_line: Optional[list[Point]]) -> GameStatus:
    """Status once the last move in `state` has been played."""
    if winning_line is not None:
        return GameStatus.win_for(state.moves[-1].player)
    if state.board.is_full:
        return GameStatus.DRAW
    return GameStatus.PLAYING


class GameSession:
    """The single active game.

    A busy flag rejects moves while an AI reply is pending, and a lock
    serializes the state changes themselves.
    """

    def __init__(
        self,
        engine: Optional[AIEngine] = None,
        store: Optional[GameRecordStore] = None,
        notify: Optional[Notifier] = None,
        scheduler: Optional[Scheduler] = None,
        ai_delay: float = AI_MOVE_DELAY,
    ) -> None:
        self.engine = engine if engine is not None else AIEngine(random.Random(AI_SEED))
        self.store = store if store is not None else GameRecordStore(SAVE_DIR)
        self.notify = notify if notify is not None else log_notifier
        self.scheduler = scheduler if scheduler is not None else timer_scheduler
        self.ai_delay = ai_delay

        self.state = BoardState()
        self.status = GameStatus.IDLE
        self.mode = GameMode.PVP
        self.difficulty: Optional[Difficulty] = None
        self.winning_line: Optional[list[Point]] = None
        self._busy = False
        # Bumped by every new/loaded game; stale AI replies compare against it
        self._generation = 0
        # Held for every state change; AI replies arrive on timer threads
        self._lock = threading.RLock()

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def ai_player(self) -> Optional[Player]:
        return AI_PLAYER if self.mode is GameMode.PVE else None

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def new_game(self, mode: GameMode = GameMode.PVP, difficulty: Optional[Difficulty] = None) -> None:
        with self._lock:
            self._generation += 1
            self._busy = False
            self.state = BoardState()
            self.status = GameStatus.PLAYING
            self.mode = mode
            if mode is GameMode.PVE:
                self.difficulty = difficulty or DEFAULT_DIFFICULTY
            else:
                self.difficulty = None
            self.winning_line = None
        logger.info(
            "New %s game%s", mode.value,
            f" ({self.difficulty.value})" if self.difficulty else "",
        )

    def apply_move(self, x: int, y: int) -> MoveOutcome:
        """Play the current player's stone at (x, y)."""
        with self._lock:
            try:
                if self.status is not GameStatus.PLAYING:
                    raise InvalidMove("No game in progress")
                if self._busy:
                    raise InvalidMove("A move is already being processed")
                if self.state.current_player is self.ai_player:
                    raise InvalidMove("It is the AI's turn")
                outcome = self._place(Point(x, y))
            except InvalidMove as exc:
                logger.info("Rejected move at (%s, %s): %s", x, y, exc)
                return MoveOutcome(accepted=False, status=self.status, reason=str(exc))
            self._schedule_ai_turn()
            return outcome

    def undo(self, moves: int = 1) -> UndoOutcome:
        """Take back up to `moves` moves.

        The player of the last undone move is to move again. If that is the
        AI, its reply is scheduled as after any human move.
        """
        with self._lock:
            if self._busy:
                return UndoOutcome(accepted=False, reason="A move is already being processed")
            if not self.state.moves:
                return UndoOutcome(accepted=False, reason="Nothing to undo")
            for _ in range(min(moves, len(self.state.moves))):
                move = self.state.undo_move()
                logger.debug("Undid %s", move)
            self.status = GameStatus.PLAYING
            self.winning_line = None
            self._schedule_ai_turn()
            return UndoOutcome(accepted=True)

    def get_ai_move(self, difficulty: Optional[Difficulty] = None) -> Optional[Point]:
        """The engine's choice for the player to move, without playing it."""
        return self._compute_ai_move(difficulty or self.difficulty or DEFAULT_DIFFICULTY)

    def get_snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.state.board.rows(),
            current_player=self.state.current_player,
            status=self.status,
            moves=list(self.state.moves),
            mode=self.mode,
            difficulty=self.difficulty,
            winning_line=list(self.winning_line) if self.winning_line else None,
        )

    # ------------------------------------------------------------------
    # Placement and the AI reply
    # ------------------------------------------------------------------

    def _place(self, point: Point) -> MoveOutcome:
        if not is_on_grid(point):
            raise InvalidMove(f"({point.x}, {point.y}) is off the board")
        self._busy = True
        try:
            player = self.state.current_player
            line = self.state.apply_move(point)
            self.status = status_after(self.state, line)
            self.winning_line = line
        finally:
            self._busy = False
        logger.debug("%s played %s -> %s", player, format_point(point), self.status.value)
        return MoveOutcome(accepted=True, status=self.status, winning_line=line)

    def _schedule_ai_turn(self) -> None:
        if (
            self.status is not GameStatus.PLAYING
            or self.ai_player is None
            or self.state.current_player is not self.ai_player
        ):
            return
        self._busy = True
        generation = self._generation
        self.scheduler(self.ai_delay, lambda: self._run_ai_turn(generation))

    def _run_ai_turn(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Dropping AI reply from an abandoned game")
            return
        try:
            point = self._compute_ai_move(self.difficulty or DEFAULT_DIFFICULTY)
        except BaseException:
            with self._lock:
                if generation == self._generation:
                    self._busy = False
            raise
        # The generation check and the placement must not be split by new_game
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping AI reply from an abandoned game")
                return
            self._busy = False
            if point is None:
                return
            try:
                self._place(point)
            except InvalidMove:
                logger.exception("AI chose an illegal move %s", point)

    def _compute_ai_move(self, difficulty: Difficulty) -> Optional[Point]:
        with self._lock:
            state = self.state.copy()
        try:
            return self.engine.select_move(state, difficulty)
        except NoLegalMove as exc:
            logger.error("AI asked to move with no legal move: %s", exc)
            self.notify("error", "The AI has no legal move: the board is full.")
            return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_game(self, name: str) -> Optional[str]:
        try:
            game_id = self.store.save(name, self.get_snapshot())
        except PersistenceFailure as exc:
            logger.error("Save failed: %s", exc)
            self.notify("error", f"Save failed: {exc}")
            return None
        self.notify("info", f"Saved '{name}'")
        return game_id

    def list_games(self) -> list[GameSummary]:
        try:
            return self.store.list()
        except PersistenceFailure as exc:
            logger.error("Listing saved games failed: %s", exc)
            self.notify("error", f"Could not list saved games: {exc}")
            return []

    def load_game(self, game_id: str) -> bool:
        """Replace the current game with a saved one by replaying its moves."""
        try:
            snapshot = self.store.load(game_id)
            state, line = _replay(snapshot)
        except PersistenceFailure as exc:
            logger.error("Load failed: %s", exc)
            self.notify("error", f"Load failed: {exc}")
            return False

        with self._lock:
            self._generation += 1
            self._busy = False
            self.state = state
            self.status = status_after(state, line) if state.moves else GameStatus.PLAYING
            self.winning_line = line
            self.mode = snapshot.mode
            self.difficulty = snapshot.difficulty
            self._schedule_ai_turn()
        logger.info("Loaded game %s (%d moves)", game_id, len(state.moves))
        self.notify("info", "Game loaded")
        return True

    def delete_game(self, game_id: str) -> bool:
        try:
            self.store.delete(game_id)
        except PersistenceFailure as exc:
            logger.error("Delete failed: %s", exc)
            self.notify("error", f"Delete failed: {exc}")
            return False
        return True


def _replay(snapshot: Snapshot) -> tuple[BoardState, Optional[list[Point]]]:
    state = BoardState()
    line = None
    for move in snapshot.moves:
        if line is not None or move.player is not state.current_player:
            raise PersistenceFailure("Saved move list is inconsistent")
        try:
            line = state.apply_move(move.point)
        except InvalidMove as exc:
            raise PersistenceFailure(f"Saved move list is inconsistent: {exc}") from exc
    return state, line
