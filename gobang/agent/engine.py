from __future__ import annotations

import logging
import random
from typing import Optional

from gobang.errors import NoLegalMove
from gobang.game.board import BoardState, format_point
from gobang.game.types import Difficulty, Point

from .base import Agent
from .easy_agent import EasyAgent
from .hard_agent import HardAgent
from .medium_agent import MediumAgent

logger = logging.getLogger(__name__)

AGENT_CLASSES: dict[Difficulty, type[Agent]] = {
    Difficulty.EASY: EasyAgent,
    Difficulty.MEDIUM: MediumAgent,
    Difficulty.HARD: HardAgent,
}


class AIEngine:
    """Picks a move for the player to move, using the tier for `difficulty`.

    All tiers share one random source so a seeded engine plays reproducibly.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.agents: dict[Difficulty, Agent] = {
            difficulty: cls(self.rng) for difficulty, cls in AGENT_CLASSES.items()
        }

    def select_move(self, state: BoardState, difficulty: Difficulty) -> Point:
        if state.board.is_full:
            raise NoLegalMove("The board is full")
        agent = self.agents[difficulty]
        move = agent.select_move(state)
        logger.debug("%s chose %s for %s", agent.name, format_point(move), state.current_player)
        return move
