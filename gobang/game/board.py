from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from gobang.errors import InvalidMove

from .types import Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5
CENTER = Point(BOARD_SIZE // 2, BOARD_SIZE // 2)

# Horizontal, vertical, diagonal, anti-diagonal
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

# Column labels: A-O (skipping no letters for 15x15)
COL_LABELS = "ABCDEFGHIJKLMNO"


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like 'H8' or 'A15' into a Point.

    Column is a letter A-O, row is a number 1-15 counted from the top.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'H8'."""
    return f"{COL_LABELS[point.y]}{point.x + 1}"


def is_on_grid(point: Point) -> bool:
    return 0 <= point.x < BOARD_SIZE and 0 <= point.y < BOARD_SIZE


@dataclass
class Move:
    point: Point
    player: Player
    index: int

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """15x15 grid of stones. Empty cells hold None."""

    def __init__(self) -> None:
        self._grid: list[list[Optional[Player]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._count = 0

    def place(self, point: Point, player: Player) -> None:
        if not is_on_grid(point):
            raise InvalidMove(f"{point} is off the board")
        if self._grid[point.x][point.y] is not None:
            raise InvalidMove(f"{format_point(point)} is occupied")
        self._grid[point.x][point.y] = player
        self._count += 1

    def remove(self, point: Point) -> None:
        if self._grid[point.x][point.y] is not None:
            self._grid[point.x][point.y] = None
            self._count -= 1

    def get(self, point: Point) -> Optional[Player]:
        return self._grid[point.x][point.y]

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.x][point.y] is None

    def is_on_grid(self, point: Point) -> bool:
        return is_on_grid(point)

    @property
    def occupied_count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == BOARD_SIZE * BOARD_SIZE

    def stones(self) -> Iterator[tuple[Point, Player]]:
        for x, row in enumerate(self._grid):
            for y, player in enumerate(row):
                if player is not None:
                    yield Point(x, y), player

    def empty_points(self) -> list[Point]:
        return [
            Point(x, y)
            for x in range(BOARD_SIZE)
            for y in range(BOARD_SIZE)
            if self._grid[x][y] is None
        ]

    @contextmanager
    def trial(self, point: Point, player: Player) -> Iterator[None]:
        """Place a stone for the duration of the block, then take it back."""
        self.place(point, player)
        try:
            yield
        finally:
            self.remove(point)

    def rows(self) -> list[list[str]]:
        """Cell names row by row: 'empty', 'black' or 'white'."""
        return [
            ["empty" if p is None else p.name.lower() for p in row]
            for row in self._grid
        ]


def find_winning_line(board: Board, point: Point) -> Optional[list[Point]]:
    """Return the five-or-longer line through `point`, or None.

    Scans each axis outward in both directions from the stone at `point`,
    stopping at the board edge or a cell of another colour.
    """
    player = board.get(point)
    if player is None:
        return None
    for dx, dy in DIRECTIONS:
        line = [point]
        for sign in (1, -1):
            x, y = point.x + sign * dx, point.y + sign * dy
            while 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE and board.get(Point(x, y)) is player:
                line.append(Point(x, y))
                x += sign * dx
                y += sign * dy
        if len(line) >= WIN_LENGTH:
            return sorted(line)
    return None


class BoardState:
    """Board plus move history and turn tracking."""

    def __init__(self) -> None:
        self.board = Board()
        self.current_player = Player.BLACK
        self.moves: list[Move] = []

    def legal_moves(self) -> list[Point]:
        return self.board.empty_points()

    def apply_move(self, point: Point) -> Optional[list[Point]]:
        """Place a stone for the current player and advance the turn.

        Returns the winning line if this stone completed five in a row.
        Raises InvalidMove for off-board or occupied points.
        """
        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point=point, player=player, index=len(self.moves)))
        self.current_player = player.other
        return find_winning_line(self.board, point)

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        return move

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def copy(self) -> BoardState:
        return copy.deepcopy(self)
