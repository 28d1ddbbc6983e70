"""Medium agent: weighs price against cash."""

from grandline.core.agents.base import Agent
from grandline.core.game.spaces import Space


class MediumAgent(Agent):
    """Buys only when the price is under 40% of cash, and then 70% of the time."""

    difficulty = "medium"
    max_price_ratio = 0.4
    buy_chance = 0.7

    def should_buy(self, money: int, space: Space) -> bool:
        if money <= 0:
            return False
        price_ratio = space.price / money
        return price_ratio < self.max_price_ratio and self.rng.random() < self.buy_chance
