"""Fallback agent for unknown difficulty levels: a coin flip."""

from grandline.core.agents.base import Agent
from grandline.core.game.spaces import Space


class RandomAgent(Agent):
    """Buys half of the time, ignoring price and cash."""

    buy_chance = 0.5

    def should_buy(self, money: int, space: Space) -> bool:
        return self.rng.random() < self.buy_chance
