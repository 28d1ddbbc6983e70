"""Base class for all AI buy policies."""

import random
from abc import ABC, abstractmethod
from typing import Optional

from grandline.core.game.config import GameConfig
from grandline.core.game.spaces import Space


class Agent(ABC):
    """
    Abstract base class for AI-controlled players.

    Agents only decide whether to buy an unowned space they landed on; the
    turn engine handles everything else. The caller still checks that the
    player can afford the price before committing funds.

    Attributes:
        rng: Random source for the probabilistic part of the decision.
        config: Rule constants; policies scale against the starting money.
    """

    difficulty: str = "default"

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[GameConfig] = None):
        """
        Initialize the agent.

        Args:
            rng: Random source; a fresh unseeded one when omitted.
            config: Rule constants; the defaults when omitted.
        """
        self.rng = rng or random.Random()
        self.config = config or GameConfig()

    @abstractmethod
    def should_buy(self, money: int, space: Space) -> bool:
        """
        Decide whether to buy ``space``.

        Args:
            money: The player's current money.
            space: The unowned space the player landed on.

        Returns:
            True to buy, False to pass.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
