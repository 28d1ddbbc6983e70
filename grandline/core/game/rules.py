"""
Pure rule functions: dice, movement, rent, tax and money debits.

Nothing in here touches the database. Randomness comes from the ``rng``
argument so callers can seed or script it.
"""

import random
from dataclasses import dataclass
from typing import Optional

from grandline.core.game.config import GameConfig
from grandline.core.game.spaces import Space, SpaceType

DEFAULT_CONFIG = GameConfig()


@dataclass(frozen=True)
class DiceRoll:
    """Two six-sided dice."""

    first: int
    second: int

    @property
    def total(self) -> int:
        return self.first + self.second

    @property
    def is_doubles(self) -> bool:
        return self.first == self.second

    def as_list(self) -> list:
        return [self.first, self.second]


@dataclass(frozen=True)
class Movement:
    """Result of moving a token around the board."""

    start: int
    end: int
    passed_go: bool
    salary: int


@dataclass(frozen=True)
class Debit:
    """Result of taking money from a player, clamped at zero."""

    balance: int
    paid: int
    shortfall: int


def roll_dice(rng: Optional[random.Random] = None) -> DiceRoll:
    """Roll two independent dice in [1, 6]."""
    rng = rng or random
    return DiceRoll(rng.randint(1, 6), rng.randint(1, 6))


def move(position: int, steps: int, config: GameConfig = DEFAULT_CONFIG) -> Movement:
    """
    Advance ``steps`` spaces from ``position``.

    Passing GO is detected by wrap-around (the new position is lower than
    the old one), which also covers landing exactly on GO.
    """
    end = (position + steps) % config.board_size
    passed_go = end < position
    return Movement(
        start=position,
        end=end,
        passed_go=passed_go,
        salary=config.go_salary if passed_go else 0,
    )


def calculate_rent(
    space: Space,
    houses: int = 0,
    has_hotel: bool = False,
    config: GameConfig = DEFAULT_CONFIG,
) -> int:
    """
    Rent owed by a visitor landing on an owned space.

    Property rent follows the improvement tier. Railroads charge their base
    rent and utilities a flat amount, regardless of how many the owner holds.
    """
    if space.space_type == SpaceType.PROPERTY:
        tier = config.hotel_rent_index if has_hotel else houses
        return space.rent[tier]
    elif space.space_type == SpaceType.RAILROAD:
        return space.rent[0]
    elif space.space_type == SpaceType.UTILITY:
        return config.utility_rent
    return 0


def tax_due(space: Space) -> int:
    """Flat tax is the first entry of the space's rent table."""
    if space.space_type != SpaceType.TAX:
        return 0
    return space.rent[0]


def debit(money: int, amount: int) -> Debit:
    """Take ``amount`` from ``money`` without ever going negative."""
    paid = min(money, amount)
    return Debit(balance=max(0, money - amount), paid=paid, shortfall=amount - paid)
