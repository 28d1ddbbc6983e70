"""Hard agent: strategic, cares about affordability and return on price."""

from grandline.core.agents.base import Agent
from grandline.core.game.spaces import Space


class HardAgent(Agent):
    """
    Buys only when the price is under 30% of cash and the base rent returns
    more than 5% of the price, and then 80% of the time.
    """

    difficulty = "hard"
    max_price_ratio = 0.3
    min_rent_yield = 0.05
    buy_chance = 0.8

    def should_buy(self, money: int, space: Space) -> bool:
        if money <= 0 or space.price <= 0 or not space.rent:
            return False

        affordability = space.price / money
        rent_yield = space.rent[0] / space.price
        if affordability >= self.max_price_ratio or rent_yield <= self.min_rent_yield:
            return False
        return self.rng.random() < self.buy_chance
