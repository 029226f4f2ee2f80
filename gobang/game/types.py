from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    x: int  # 0-indexed row, 0 = top
    y: int  # 0-indexed column, 0 = left


class GameStatus(enum.Enum):
    IDLE = "idle"
    PLAYING = "playing"
    BLACK_WIN = "black_win"
    WHITE_WIN = "white_win"
    DRAW = "draw"

    @classmethod
    def win_for(cls, player: Player) -> GameStatus:
        return cls.BLACK_WIN if player is Player.BLACK else cls.WHITE_WIN

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.BLACK_WIN, GameStatus.WHITE_WIN, GameStatus.DRAW)


class GameMode(enum.Enum):
    PVP = "pvp"
    PVE = "pve"


class Difficulty(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
