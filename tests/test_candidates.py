import random

from gobang.agent.candidates import (
    generate_candidates,
    nearby_empty,
    opening_reply,
)
from gobang.agent.evaluator import score_point
from gobang.game.board import BOARD_SIZE, BoardState
from gobang.game.types import Player, Point


def make_state(black=(), white=(), to_move=Player.WHITE) -> BoardState:
    gs = BoardState()
    for p in black:
        gs.board.place(Point(*p), Player.BLACK)
    for p in white:
        gs.board.place(Point(*p), Player.WHITE)
    gs.current_player = to_move
    return gs


class TestOpening:
    def test_empty_board_returns_center(self):
        gs = BoardState()
        assert generate_candidates(gs, Player.BLACK, random.Random(0)) == [Point(7, 7)]

    def test_single_stone_reply_is_adjacent(self):
        gs = make_state(black=[(7, 7)])
        allowed = {Point(8, 7), Point(7, 8), Point(8, 8), Point(6, 8)}
        seen = set()
        for seed in range(40):
            cands = generate_candidates(gs, Player.WHITE, random.Random(seed))
            assert len(cands) == 1
            assert cands[0] in allowed
            seen.add(cands[0])
        assert seen == allowed

    def test_reply_is_clamped_and_empty(self):
        gs = make_state(black=[(14, 14)])
        for seed in range(10):
            assert opening_reply(gs.board, Point(14, 14), random.Random(seed)) == Point(13, 14)

    def test_reply_at_top_edge(self):
        gs = make_state(black=[(0, 0)])
        allowed = {Point(1, 0), Point(0, 1), Point(1, 1)}
        for seed in range(20):
            cands = generate_candidates(gs, Player.WHITE, random.Random(seed))
            assert cands[0] in allowed


class TestNearby:
    def test_all_candidates_are_empty_and_near(self):
        gs = make_state(black=[(7, 7)], white=[(7, 8)])
        cands = generate_candidates(gs, Player.BLACK, random.Random(0))
        assert len(cands) == 28
        for p in cands:
            assert gs.board.is_empty(p)
            assert max(abs(p.x - 7), abs(p.y - 7)) <= 2 or max(abs(p.x - 7), abs(p.y - 8)) <= 2

    def test_corner_stones_stay_on_board(self):
        gs = make_state(black=[(0, 0)], white=[(14, 14)])
        cands = nearby_empty(gs.board)
        assert len(cands) == 16
        assert all(0 <= p.x < BOARD_SIZE and 0 <= p.y < BOARD_SIZE for p in cands)

    def test_sorted_by_score(self):
        gs = make_state(black=[(7, 5), (7, 6), (7, 7)], white=[(8, 6), (6, 6)])
        cands = generate_candidates(gs, Player.WHITE, random.Random(0))
        scores = [score_point(gs.board, p, Player.WHITE) for p in cands]
        assert scores == sorted(scores, reverse=True)

    def test_limit(self):
        gs = make_state(black=[(7, 7)], white=[(7, 8)])
        cands = generate_candidates(gs, Player.BLACK, random.Random(0), limit=10)
        assert len(cands) == 10

    def test_best_first_blocks_open_three(self):
        gs = make_state(black=[(7, 5), (7, 6), (7, 7)], white=[(0, 0), (14, 14)])
        cands = generate_candidates(gs, Player.WHITE, random.Random(0))
        assert cands[0] in {Point(7, 4), Point(7, 8)}
