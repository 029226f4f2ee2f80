"""Candidate move generation: empty cells worth looking at, best first."""

from __future__ import annotations

import random
from typing import Iterable, Optional

from gobang.game.board import BOARD_SIZE, CENTER, Board, BoardState
from gobang.game.types import Player, Point

from .evaluator import score_point

NEIGHBOR_RADIUS = 2

# Replies to a lone opening stone
OPENING_OFFSETS = [(1, 0), (0, 1), (1, 1), (-1, 1)]


def _clamp(value: int) -> int:
    return max(0, min(BOARD_SIZE - 1, value))


def opening_reply(board: Board, stone: Point, rng: random.Random) -> Point:
    """A point next to the only stone on the board, chosen at random."""
    options = []
    for dx, dy in OPENING_OFFSETS:
        target = Point(_clamp(stone.x + dx), _clamp(stone.y + dy))
        if board.is_empty(target) and target not in options:
            options.append(target)
    return rng.choice(options)


def nearby_empty(board: Board, radius: int = NEIGHBOR_RADIUS) -> list[Point]:
    """Empty cells within Chebyshev distance `radius` of any stone."""
    found: set[Point] = set()
    for stone, _ in board.stones():
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                x, y = stone.x + dx, stone.y + dy
                if 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE:
                    p = Point(x, y)
                    if board.is_empty(p):
                        found.add(p)
    return list(found)


def order_candidates(
    board: Board, points: Iterable[Point], player: Player
) -> list[Point]:
    """Sort points by evaluator score for `player`, best first."""
    scored = [(score_point(board, p, player), p) for p in points]
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [p for _, p in scored]


def ranked_candidates(
    board: Board, player: Player, limit: Optional[int] = None
) -> list[Point]:
    points = nearby_empty(board) or board.empty_points()
    ordered = order_candidates(board, points, player)
    return ordered[:limit] if limit is not None else ordered


def generate_candidates(
    state: BoardState,
    player: Player,
    rng: random.Random,
    limit: Optional[int] = None,
) -> list[Point]:
    """Candidate moves for `player`.

    Empty board: the centre. One stone: a random neighbour of it. Otherwise
    every empty cell near a stone, ranked by the evaluator.
    """
    board = state.board
    if board.occupied_count == 0:
        return [CENTER]
    if board.occupied_count == 1:
        stone, _ = next(board.stones())
        return [opening_reply(board, stone, rng)]
    return ranked_candidates(board, player, limit)
