"""
Board space definitions and types.

Each space kind is its own dataclass carrying only the fields that matter
for it. Landing resolution dispatches on ``space_type``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class SpaceType(Enum):
    """Types of spaces on the board."""

    GO = "go"
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    TAX = "tax"
    CHANCE = "chance"
    COMMUNITY_CHEST = "communitychest"
    JAIL = "jail"
    GO_TO_JAIL = "gotojail"
    FREE_PARKING = "freeparking"


OWNABLE_TYPES = (SpaceType.PROPERTY, SpaceType.RAILROAD, SpaceType.UTILITY)


@dataclass(frozen=True)
class Space:
    """Base class for a board space."""

    name: str
    position: int
    space_type: SpaceType

    @property
    def price(self) -> int:
        return 0

    @property
    def rent(self) -> Tuple[int, ...]:
        return ()

    @property
    def color(self) -> Optional[str]:
        return None

    @property
    def is_ownable(self) -> bool:
        return self.space_type in OWNABLE_TYPES

    def to_dict(self) -> Dict[str, Any]:
        """Public row used by the board view."""
        return {
            "id": self.position,
            "name": self.name,
            "type": self.space_type.value,
            "price": self.price,
            "rent": list(self.rent),
            "color": self.color,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass(frozen=True, repr=False)
class GoSpace(Space):
    """The GO space."""

    name: str = "GO"
    position: int = 0
    space_type: SpaceType = field(default=SpaceType.GO, init=False)


@dataclass(frozen=True, repr=False)
class PropertySpace(Space):
    """
    A property that can be owned.

    ``rent_table`` is indexed by improvement level: 0-4 houses, then the
    hotel tier at index 5.
    """

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.PROPERTY, init=False)
    cost: int = 0
    color_group: str = ""
    rent_table: Tuple[int, ...] = ()

    @property
    def price(self) -> int:
        return self.cost

    @property
    def rent(self) -> Tuple[int, ...]:
        return self.rent_table

    @property
    def color(self) -> Optional[str]:
        return self.color_group


@dataclass(frozen=True, repr=False)
class RailroadSpace(Space):
    """A ship line; behaves like a railroad."""

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.RAILROAD, init=False)
    cost: int = 200
    base_rent: int = 25

    @property
    def price(self) -> int:
        return self.cost

    @property
    def rent(self) -> Tuple[int, ...]:
        return (self.base_rent,)


@dataclass(frozen=True, repr=False)
class UtilitySpace(Space):
    """A utility space. ``multipliers`` are the dice multipliers for one and two owned."""

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.UTILITY, init=False)
    cost: int = 150
    multipliers: Tuple[int, ...] = (4, 10)

    @property
    def price(self) -> int:
        return self.cost

    @property
    def rent(self) -> Tuple[int, ...]:
        return self.multipliers


@dataclass(frozen=True, repr=False)
class TaxSpace(Space):
    """A flat tax."""

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.TAX, init=False)
    amount: int = 0

    @property
    def rent(self) -> Tuple[int, ...]:
        return (self.amount,)


@dataclass(frozen=True, repr=False)
class ChanceSpace(Space):
    """A Chance card space. There are several, so the position is required."""

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.CHANCE, init=False)


@dataclass(frozen=True, repr=False)
class CommunityChestSpace(Space):
    """A Community Chest card space. There are several, so the position is required."""

    name: str
    position: int
    space_type: SpaceType = field(default=SpaceType.COMMUNITY_CHEST, init=False)


@dataclass(frozen=True, repr=False)
class JailSpace(Space):
    """The jail / just visiting space."""

    name: str = "Impel Down"
    position: int = 10
    space_type: SpaceType = field(default=SpaceType.JAIL, init=False)


@dataclass(frozen=True, repr=False)
class GoToJailSpace(Space):
    """Sends the player straight to jail."""

    name: str = "Go to Impel Down"
    position: int = 30
    space_type: SpaceType = field(default=SpaceType.GO_TO_JAIL, init=False)


@dataclass(frozen=True, repr=False)
class FreeParkingSpace(Space):
    """Nothing happens here."""

    name: str = "Free Parking"
    position: int = 20
    space_type: SpaceType = field(default=SpaceType.FREE_PARKING, init=False)
