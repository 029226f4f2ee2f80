from __future__ import annotations

import abc
import random
from collections import Counter
from typing import Callable, Iterable, Optional

from gobang.game.board import Board, BoardState, find_winning_line
from gobang.game.types import Player, Point

from .pattern import pattern_counts


class Agent(abc.ABC):
    """One difficulty tier. The player to move in `state` is the agent."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @abc.abstractmethod
    def select_move(self, state: BoardState) -> Point:
        """Return the point where this agent wants to play."""

    @property
    def name(self) -> str:
        return self.__class__.__name__


def wins_at(board: Board, point: Point, player: Player) -> bool:
    with board.trial(point, player):
        return find_winning_line(board, point) is not None


def find_winning_move(
    board: Board, candidates: Iterable[Point], player: Player
) -> Optional[Point]:
    """First candidate that completes five for `player`."""
    for point in candidates:
        if wins_at(board, point, player):
            return point
    return None


def find_pattern_move(
    board: Board,
    candidates: Iterable[Point],
    player: Player,
    predicate: Callable[[Counter], bool],
) -> Optional[Point]:
    """First candidate whose pattern counts for `player` satisfy `predicate`."""
    for point in candidates:
        if predicate(pattern_counts(board, point, player)):
            return point
    return None
