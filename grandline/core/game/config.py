"""
Game configuration settings.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Rule constants for a Grand Line game."""

    starting_money: int = 1500
    go_salary: int = 200
    board_size: int = 40
    jail_position: int = 10

    # Index of the hotel tier in a property rent table
    hotel_rent_index: int = 5
    # Flat utility rent; dice multipliers are not applied
    utility_rent: int = 50

    currency: str = "Berries"
