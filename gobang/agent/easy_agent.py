"""Easy agent: a noisy line-count heuristic that misses half its blocks."""

from __future__ import annotations

from gobang.game.board import BOARD_SIZE, CENTER, DIRECTIONS, Board, BoardState
from gobang.game.types import Player, Point

from .base import Agent, find_winning_move
from .candidates import generate_candidates

RANDOM_MOVE_CHANCE = 0.3
BLOCK_CHANCE = 0.5
TOP_CHOICES = 10

OWN_LINE_WEIGHT = 10
OPPONENT_LINE_WEIGHT = 8
CENTER_AXIS_WEIGHT = 2


def _run_length(board: Board, point: Point, player: Player, dx: int, dy: int) -> int:
    """Stones of `player` touching `point` along one axis, both sides."""
    count = 0
    for sign in (1, -1):
        x, y = point.x + sign * dx, point.y + sign * dy
        while 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE and board.get(Point(x, y)) is player:
            count += 1
            x += sign * dx
            y += sign * dy
    return count


def line_score(board: Board, point: Point, player: Player) -> int:
    score = 0
    for dx, dy in DIRECTIONS:
        score += OWN_LINE_WEIGHT * _run_length(board, point, player, dx, dy)
        score += OPPONENT_LINE_WEIGHT * _run_length(board, point, player.other, dx, dy)
    half = BOARD_SIZE // 2
    score += CENTER_AXIS_WEIGHT * (half - abs(point.x - CENTER.x))
    score += CENTER_AXIS_WEIGHT * (half - abs(point.y - CENTER.y))
    return score


class EasyAgent(Agent):
    def select_move(self, state: BoardState) -> Point:
        board = state.board
        me = state.current_player
        empty = board.empty_points()

        if self.rng.random() < RANDOM_MOVE_CHANCE:
            return self.rng.choice(empty)

        candidates = generate_candidates(state, me, self.rng)
        win = find_winning_move(board, candidates, me)
        if win is not None:
            return win

        block = find_winning_move(board, candidates, me.other)
        if block is not None and self.rng.random() < BLOCK_CHANCE:
            return block

        scored = sorted(empty, key=lambda p: (-line_score(board, p, me), p))
        return self.rng.choice(scored[:TOP_CHOICES])
