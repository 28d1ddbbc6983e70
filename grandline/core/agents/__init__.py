import random as _random
from typing import Optional

from grandline.core.agents.base import Agent
from grandline.core.agents.crew import CREW, CrewMember
from grandline.core.agents.easy import EasyAgent
from grandline.core.agents.hard import HardAgent
from grandline.core.agents.medium import MediumAgent
from grandline.core.agents.random import RandomAgent
from grandline.core.game.config import GameConfig

AGENTS_BY_DIFFICULTY = {
    "easy": EasyAgent,
    "medium": MediumAgent,
    "hard": HardAgent,
}


def build_agent(
    difficulty: Optional[str],
    rng: Optional[_random.Random] = None,
    config: Optional[GameConfig] = None,
) -> Agent:
    """Return the buy policy for ``difficulty``; unknown values get a coin flip."""
    key = getattr(difficulty, "value", difficulty) or ""
    agent_cls = AGENTS_BY_DIFFICULTY.get(key, RandomAgent)
    return agent_cls(rng, config)


__all__ = [
    "Agent",
    "EasyAgent",
    "MediumAgent",
    "HardAgent",
    "RandomAgent",
    "AGENTS_BY_DIFFICULTY",
    "CREW",
    "CrewMember",
    "build_agent",
]
