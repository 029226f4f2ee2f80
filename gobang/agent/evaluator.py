"""Static scoring of candidate points and whole positions."""

from __future__ import annotations

from collections import Counter

from gobang.game.board import CENTER, Board
from gobang.game.types import Player, Point

from .pattern import PatternKind, pattern_counts

# ---------------------------------------------------------------------------
# Pattern weights
# ---------------------------------------------------------------------------

PATTERN_WEIGHTS: dict[PatternKind, int] = {
    PatternKind.FIVE: 1_000_000,
    PatternKind.LIVE_FOUR: 100_000,
    PatternKind.RUSH_FOUR: 10_000,
    PatternKind.LIVE_THREE: 5_000,
    PatternKind.SLEEPING_THREE: 500,
    PatternKind.LIVE_TWO: 200,
    PatternKind.SLEEPING_TWO: 50,
    PatternKind.LIVE_ONE: 10,
}

# Opponent patterns count slightly less than our own when scoring a point
DEFENSE_FACTORS: dict[PatternKind, float] = {
    PatternKind.FIVE: 0.9,
    PatternKind.LIVE_FOUR: 0.9,
    PatternKind.RUSH_FOUR: 0.85,
    PatternKind.LIVE_THREE: 0.8,
    PatternKind.SLEEPING_THREE: 0.7,
    PatternKind.LIVE_TWO: 0.6,
    # Local choice: one more step down the falloff after LIVE_TWO
    PatternKind.SLEEPING_TWO: 0.5,
}

CENTER_WEIGHT = 2
STONE_CENTER_BONUS = 1

# Largest Manhattan distance from the centre on a 15x15 board
MAX_CENTER_DISTANCE = 14

WIN_SCORE = PATTERN_WEIGHTS[PatternKind.FIVE]


def center_distance(point: Point) -> int:
    return abs(point.x - CENTER.x) + abs(point.y - CENTER.y)


def pattern_weight(counts: Counter) -> int:
    return sum(PATTERN_WEIGHTS[kind] * n for kind, n in counts.items())


def score_point(board: Board, point: Point, player: Player) -> int:
    """Value of an empty point for `player`: attack, damped defence, centre."""
    attack = pattern_weight(pattern_counts(board, point, player))
    defense = sum(
        PATTERN_WEIGHTS[kind] * DEFENSE_FACTORS.get(kind, 0.0) * n
        for kind, n in pattern_counts(board, point, player.other).items()
    )
    center = (MAX_CENTER_DISTANCE - center_distance(point)) * CENTER_WEIGHT
    return attack + int(defense) + center


def evaluate_piece_at(board: Board, point: Point) -> int:
    """Weight of the patterns the stone at `point` takes part in."""
    player = board.get(point)
    if player is None:
        return 0
    return pattern_weight(pattern_counts(board, point, player))


def evaluate_board(board: Board, player: Player) -> int:
    """Whole-board score from `player`'s point of view (positive = ahead)."""
    score = 0
    for point, owner in board.stones():
        value = evaluate_piece_at(board, point)
        value += (MAX_CENTER_DISTANCE - center_distance(point)) * STONE_CENTER_BONUS
        score += value if owner is player else -value
    return score
