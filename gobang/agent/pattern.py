"""Line-pattern classification for a stone along each of the four axes."""

from __future__ import annotations

import enum
from collections import Counter
from typing import Optional

from gobang.game.board import BOARD_SIZE, DIRECTIONS, WIN_LENGTH, Board
from gobang.game.types import Player, Point

# Cells inspected on each side of the point (9-cell window per axis)
WINDOW_REACH = 4


class PatternKind(enum.Enum):
    FIVE = "five"
    LIVE_FOUR = "live_four"
    RUSH_FOUR = "rush_four"
    LIVE_THREE = "live_three"
    SLEEPING_THREE = "sleeping_three"
    LIVE_TWO = "live_two"
    SLEEPING_TWO = "sleeping_two"
    LIVE_ONE = "live_one"  # reserved, never produced by classify()


PatternCount = Counter  # Counter[PatternKind]

# (contiguous count, open ends) -> pattern; counts >= 5 are always FIVE
_CLASSIFICATION: dict[tuple[int, int], PatternKind] = {
    (4, 2): PatternKind.LIVE_FOUR,
    (4, 1): PatternKind.RUSH_FOUR,
    (3, 2): PatternKind.LIVE_THREE,
    (3, 1): PatternKind.SLEEPING_THREE,
    (2, 2): PatternKind.LIVE_TWO,
    (2, 1): PatternKind.SLEEPING_TWO,
}


def classify(count: int, open_ends: int) -> Optional[PatternKind]:
    if count >= WIN_LENGTH:
        return PatternKind.FIVE
    return _CLASSIFICATION.get((count, open_ends))


def scan_axis(
    board: Board, point: Point, player: Player, direction: tuple[int, int]
) -> tuple[int, int]:
    """Count `player`'s contiguous run through `point` and its open ends.

    The point itself is counted whatever it holds. An end is open when the
    walk stops on an empty cell; the board edge or an opponent stone blocks it.
    """
    dx, dy = direction
    count = 1
    open_ends = 0
    for sign in (1, -1):
        for step in range(1, WINDOW_REACH + 1):
            x, y = point.x + sign * dx * step, point.y + sign * dy * step
            if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
                break
            cell = board.get(Point(x, y))
            if cell is player:
                count += 1
                continue
            if cell is None:
                open_ends += 1
            break
    return count, open_ends


def analyze_axis(
    board: Board, point: Point, player: Player, direction: tuple[int, int]
) -> Optional[PatternKind]:
    return classify(*scan_axis(board, point, player, direction))


def pattern_counts(board: Board, point: Point, player: Player) -> Counter:
    """Patterns `player` has through `point`, one per axis at most.

    An empty point is evaluated as if `player` had just played there; the
    board is restored before returning.
    """
    if board.is_empty(point):
        with board.trial(point, player):
            return _count_axes(board, point, player)
    return _count_axes(board, point, player)


def _count_axes(board: Board, point: Point, player: Player) -> Counter:
    counts: Counter = Counter()
    for direction in DIRECTIONS:
        kind = analyze_axis(board, point, player, direction)
        if kind is not None:
            counts[kind] += 1
    return counts


def is_double_threat(counts: Counter) -> bool:
    """Two open threes, or an open three together with a rush four."""
    threes = counts[PatternKind.LIVE_THREE]
    return threes >= 2 or (threes >= 1 and counts[PatternKind.RUSH_FOUR] >= 1)
