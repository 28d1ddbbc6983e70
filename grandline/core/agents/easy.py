"""Easy agent: buys on a whim, more often when flush."""

from grandline.core.agents.base import Agent
from grandline.core.game.spaces import Space


class EasyAgent(Agent):
    """
    Impulsive buyer.

    Buys with probability ``0.3 + 0.3 * money / starting_money``. The
    probability is not clamped, so above roughly 1.56x the starting money
    it always buys.
    """

    difficulty = "easy"

    def buy_probability(self, money: int) -> float:
        return 0.3 + 0.3 * (money / self.config.starting_money)

    def should_buy(self, money: int, space: Space) -> bool:
        return self.rng.random() < self.buy_probability(money)
