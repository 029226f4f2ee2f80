"""Medium agent: fixed priority cascade over evaluator-ranked candidates.

Only single threats are answered; a double threat that needs two blocking
stones is handled like any other position.
"""

from __future__ import annotations

from gobang.game.board import BoardState
from gobang.game.types import Point

from .base import Agent, find_pattern_move, find_winning_move
from .candidates import generate_candidates
from .pattern import PatternKind

TOP_CHOICES = 3
BEST_CHOICE_CHANCE = 0.7


def _has_live_four(counts) -> bool:
    return counts[PatternKind.LIVE_FOUR] > 0


def _has_four(counts) -> bool:
    return (
        counts[PatternKind.FIVE] + counts[PatternKind.LIVE_FOUR] + counts[PatternKind.RUSH_FOUR]
    ) > 0


class MediumAgent(Agent):
    def select_move(self, state: BoardState) -> Point:
        board = state.board
        me = state.current_player
        opponent = me.other
        candidates = generate_candidates(state, me, self.rng)

        cascade = (
            lambda: find_winning_move(board, candidates, me),
            lambda: find_winning_move(board, candidates, opponent),
            lambda: find_pattern_move(board, candidates, me, _has_live_four),
            lambda: find_pattern_move(board, candidates, opponent, _has_live_four),
            lambda: find_pattern_move(board, candidates, me, _has_four),
            lambda: find_pattern_move(board, candidates, opponent, _has_four),
        )
        for rule in cascade:
            move = rule()
            if move is not None:
                return move

        top = candidates[:TOP_CHOICES]
        if self.rng.random() < BEST_CHOICE_CHANCE:
            return top[0]
        return self.rng.choice(top)
