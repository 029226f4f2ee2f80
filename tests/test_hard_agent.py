"""Tests for the hard tier: killer scan and minimax search."""

from __future__ import annotations

import random

from gobang.agent.base import wins_at
from gobang.agent.evaluator import WIN_SCORE
from gobang.agent.hard_agent import (
    INF,
    HardAgent,
    find_killer_move,
    minimax,
)
from gobang.agent.pattern import PatternKind, pattern_counts
from gobang.game.board import BoardState
from gobang.game.types import Player, Point

CORNERS = [(0, 0), (0, 14), (14, 0), (14, 14)]


def make_state(black=(), white=(), to_move=Player.WHITE) -> BoardState:
    gs = BoardState()
    for p in black:
        gs.board.place(Point(*p), Player.BLACK)
    for p in white:
        gs.board.place(Point(*p), Player.WHITE)
    gs.current_player = to_move
    return gs


# ---------------------------------------------------------------------------
# Killer moves
# ---------------------------------------------------------------------------

class TestKillerMoves:
    def test_takes_immediate_win(self):
        gs = make_state(
            black=[(7, 3), (7, 4), (7, 5), (7, 6)],
            white=[(3, 3), (3, 4), (3, 5), (3, 6)],
        )
        assert HardAgent(random.Random(0)).select_move(gs) in {Point(3, 2), Point(3, 7)}

    def test_blocks_rush_four(self):
        gs = make_state(
            black=[(7, 3), (7, 4), (7, 5), (7, 6)],
            white=[(7, 2), (0, 0), (0, 14)],
        )
        assert HardAgent(random.Random(0)).select_move(gs) == Point(7, 7)

    def test_blocks_open_four(self):
        gs = make_state(black=[(7, 4), (7, 5), (7, 6), (7, 7)], white=CORNERS)
        assert HardAgent(random.Random(0)).select_move(gs) in {Point(7, 3), Point(7, 8)}

    def test_blocks_open_three_before_it_becomes_live_four(self):
        gs = make_state(black=[(7, 5), (7, 6), (7, 7)], white=CORNERS)
        move = HardAgent(random.Random(0)).select_move(gs)
        assert move in {Point(7, 4), Point(7, 8)}

        gs.board.place(move, Player.WHITE)
        for point in gs.board.empty_points():
            assert not wins_at(gs.board, point, Player.BLACK)
            assert pattern_counts(gs.board, point, Player.BLACK)[PatternKind.LIVE_FOUR] == 0

    def test_own_live_four_before_blocking(self):
        gs = make_state(
            black=[(7, 5), (7, 6), (7, 7), (14, 14)],
            white=[(3, 4), (3, 5), (3, 6), (0, 0)],
        )
        assert HardAgent(random.Random(0)).select_move(gs) in {Point(3, 3), Point(3, 7)}

    def test_makes_double_three(self):
        gs = make_state(black=CORNERS, white=[(7, 5), (7, 6), (5, 7), (6, 7)])
        assert find_killer_move(gs.board, gs.board.empty_points(), Player.WHITE) == Point(7, 7)

    def test_blocks_double_three(self):
        gs = make_state(black=[(7, 5), (7, 6), (5, 7), (6, 7)], white=CORNERS)
        assert HardAgent(random.Random(0)).select_move(gs) == Point(7, 7)

    def test_no_killer_in_quiet_position(self):
        gs = make_state(black=[(7, 7)], white=[(8, 8)])
        assert find_killer_move(gs.board, gs.board.empty_points(), Player.BLACK) is None


# ---------------------------------------------------------------------------
# Minimax
# ---------------------------------------------------------------------------

class TestMinimax:
    def test_completed_five_short_circuits(self):
        gs = make_state(black=[(7, y) for y in range(3, 8)], white=[(0, 0)])
        score = minimax(gs.board, 4, -INF, INF, True, Player.WHITE, Point(7, 7))
        assert score == -WIN_SCORE

    def test_own_five_is_win_score(self):
        gs = make_state(white=[(7, y) for y in range(3, 8)], black=[(0, 0)])
        score = minimax(gs.board, 4, -INF, INF, False, Player.WHITE, Point(7, 3))
        assert score == WIN_SCORE

    def test_finds_win_within_horizon(self):
        # White to move with an open four: the maximizing side reaches five
        gs = make_state(white=[(7, 4), (7, 5), (7, 6), (7, 7)], black=[(0, 0), (0, 2)])
        score = minimax(gs.board, 1, -INF, INF, True, Player.WHITE)
        assert score == WIN_SCORE

    def test_search_restores_board(self):
        gs = make_state(black=[(7, 7), (6, 8)], white=[(8, 8), (6, 6)])
        before = gs.board.rows()
        minimax(gs.board, 2, -INF, INF, True, Player.WHITE)
        assert gs.board.rows() == before
        assert gs.board.occupied_count == 4

    def test_search_depth_by_candidate_count(self):
        agent = HardAgent(random.Random(0))
        assert agent.search_depth(15) == 6
        assert agent.search_depth(16) == 4

    def test_shallow_search_returns_legal_move(self):
        gs = make_state(black=[(7, 7), (6, 8)], white=[(8, 8)], to_move=Player.WHITE)
        before = gs.board.rows()
        agent = HardAgent(random.Random(0), deep_depth=2, shallow_depth=2)
        move = agent.select_move(gs)
        assert gs.board.is_empty(move)
        assert gs.board.rows() == before
