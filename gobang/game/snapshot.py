from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .board import Move
from .types import Difficulty, GameMode, GameStatus, Player, Point


@dataclass
class Snapshot:
    """Read-only view of a session, also the unit of persistence."""

    board: list[list[str]]
    current_player: Player
    status: GameStatus
    moves: list[Move] = field(default_factory=list)
    mode: GameMode = GameMode.PVP
    difficulty: Optional[Difficulty] = None
    winning_line: Optional[list[Point]] = None

    def to_dict(self) -> dict:
        return {
            "board": self.board,
            "current_player": self.current_player.name.lower(),
            "status": self.status.value,
            "mode": self.mode.value,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "moves": [
                {
                    "move_number": m.index + 1,
                    "player": m.player.name.lower(),
                    "x": m.point.x,
                    "y": m.point.y,
                }
                for m in self.moves
            ],
            "winning_line": (
                [[p.x, p.y] for p in self.winning_line] if self.winning_line else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Snapshot:
        """Inverse of to_dict. Raises KeyError/ValueError on malformed data."""
        moves = [
            Move(
                point=Point(int(m["x"]), int(m["y"])),
                player=Player[m["player"].upper()],
                index=i,
            )
            for i, m in enumerate(data["moves"])
        ]
        difficulty = data.get("difficulty")
        line = data.get("winning_line")
        return cls(
            board=data["board"],
            current_player=Player[data["current_player"].upper()],
            status=GameStatus(data["status"]),
            moves=moves,
            mode=GameMode(data["mode"]),
            difficulty=Difficulty(difficulty) if difficulty else None,
            winning_line=[Point(x, y) for x, y in line] if line else None,
        )
