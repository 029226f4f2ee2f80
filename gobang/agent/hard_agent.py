"""Hard agent: killer-move scan, then minimax with alpha-beta pruning.

The search plays trial stones on the board it is given and takes each one
back before returning, so the board is unchanged afterwards.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from gobang.game.board import Board, BoardState, find_winning_line
from gobang.game.types import Player, Point

from .base import Agent, find_pattern_move, find_winning_move
from .candidates import generate_candidates, ranked_candidates
from .evaluator import WIN_SCORE, evaluate_board
from .pattern import PatternKind, is_double_threat

INF = math.inf

DEEP_SEARCH_DEPTH = 6
SHALLOW_SEARCH_DEPTH = 4
# Use the deep search when the root has at most this many candidates
DEEP_SEARCH_MAX_CANDIDATES = 15
# Moves explored per ply
BRANCH_LIMIT = 10


def _has_live_four(counts) -> bool:
    return counts[PatternKind.LIVE_FOUR] > 0


# ---------------------------------------------------------------------------
# Killer moves
# ---------------------------------------------------------------------------

def find_killer_move(
    board: Board, candidates: list[Point], player: Player
) -> Optional[Point]:
    """Win now, else block a win, else make or block a live four, else make
    or block a double threat."""
    opponent = player.other
    checks = (
        lambda: find_winning_move(board, candidates, player),
        lambda: find_winning_move(board, candidates, opponent),
        lambda: find_pattern_move(board, candidates, player, _has_live_four),
        lambda: find_pattern_move(board, candidates, opponent, _has_live_four),
        lambda: find_pattern_move(board, candidates, player, is_double_threat),
        lambda: find_pattern_move(board, candidates, opponent, is_double_threat),
    )
    for check in checks:
        move = check()
        if move is not None:
            return move
    return None


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    ai_player: Player,
    last_move: Optional[Point] = None,
    branch_limit: int = BRANCH_LIMIT,
) -> float:
    """Score of the position for `ai_player`, searching `depth` more plies.

    A completed five on `last_move` ends the search at +/-WIN_SCORE.
    """
    if last_move is not None and find_winning_line(board, last_move) is not None:
        return WIN_SCORE if board.get(last_move) is ai_player else -WIN_SCORE
    if depth == 0 or board.is_full:
        return evaluate_board(board, ai_player)

    mover = ai_player if maximizing else ai_player.other
    candidates = ranked_candidates(board, mover, branch_limit)
    if not candidates:
        return evaluate_board(board, ai_player)

    if maximizing:
        best = -INF
        for move in candidates:
            with board.trial(move, mover):
                score = minimax(board, depth - 1, alpha, beta, False, ai_player, move, branch_limit)
            best = max(best, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break
        return best

    best = INF
    for move in candidates:
        with board.trial(move, mover):
            score = minimax(board, depth - 1, alpha, beta, True, ai_player, move, branch_limit)
        best = min(best, score)
        beta = min(beta, score)
        if alpha >= beta:
            break
    return best


# ---------------------------------------------------------------------------
# HardAgent
# ---------------------------------------------------------------------------

class HardAgent(Agent):
    """Killer scan + fixed-depth minimax."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        deep_depth: int = DEEP_SEARCH_DEPTH,
        shallow_depth: int = SHALLOW_SEARCH_DEPTH,
        branch_limit: int = BRANCH_LIMIT,
    ) -> None:
        super().__init__(rng)
        self.deep_depth = deep_depth
        self.shallow_depth = shallow_depth
        self.branch_limit = branch_limit

    def search_depth(self, candidate_count: int) -> int:
        if candidate_count <= DEEP_SEARCH_MAX_CANDIDATES:
            return self.deep_depth
        return self.shallow_depth

    def select_move(self, state: BoardState) -> Point:
        board = state.board
        me = state.current_player
        candidates = generate_candidates(state, me, self.rng)

        killer = find_killer_move(board, candidates, me)
        if killer is not None:
            return killer

        depth = self.search_depth(len(candidates))
        root_moves = candidates[: self.branch_limit]
        if len(root_moves) == 1:
            return root_moves[0]

        alpha = -INF
        best_score = -INF
        best_move: Optional[Point] = None
        for move in root_moves:
            with board.trial(move, me):
                score = minimax(
                    board, depth - 1, alpha, INF, False, me, move, self.branch_limit
                )
            if best_move is None or score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        assert best_move is not None, "No candidates found"
        return best_move
