from typing import Any, Dict, List, Optional, Sequence

from grandline.core.game.cards import CHANCE_CARDS, COMMUNITY_CHEST_CARDS, Card
from grandline.core.game.spaces import (
    Space,
    GoSpace,
    PropertySpace,
    RailroadSpace,
    UtilitySpace,
    TaxSpace,
    ChanceSpace,
    CommunityChestSpace,
    JailSpace,
    GoToJailSpace,
    FreeParkingSpace,
)

BOARD_SIZE = 40


class Board:
    """The Grand Line board with 40 spaces. Immutable and shared across games."""

    def __init__(self, spaces: Optional[Sequence[Space]] = None):
        self.spaces: tuple = tuple(spaces) if spaces is not None else self._create_standard_board()
        if len(self.spaces) != BOARD_SIZE:
            raise ValueError(f"Board must have {BOARD_SIZE} spaces, got {len(self.spaces)}")
        for index, space in enumerate(self.spaces):
            if space.position != index:
                raise ValueError(f"Space {space.name!r} is at index {index} but claims position {space.position}")

    @staticmethod
    def _create_standard_board() -> tuple:
        """Create the standard 40-space board."""
        return (
            # Bottom row (0-10)
            GoSpace(),
            PropertySpace("Foosha Village", 1, cost=60, color_group="brown", rent_table=(2, 10, 30, 90, 160, 250)),
            CommunityChestSpace("Treasure Chest", 2),
            PropertySpace("Shells Town", 3, cost=60, color_group="brown", rent_table=(4, 20, 60, 180, 320, 450)),
            TaxSpace("Marine Tax", 4, amount=200),
            RailroadSpace("Going Merry", 5),
            PropertySpace("Orange Town", 6, cost=100, color_group="lightblue", rent_table=(6, 30, 90, 270, 400, 550)),
            ChanceSpace("Log Pose", 7),
            PropertySpace("Syrup Village", 8, cost=100, color_group="lightblue", rent_table=(6, 30, 90, 270, 400, 550)),
            PropertySpace("Baratie", 9, cost=120, color_group="lightblue", rent_table=(8, 40, 100, 300, 450, 600)),
            JailSpace(),
            # Left side (11-20)
            PropertySpace("Arlong Park", 11, cost=140, color_group="pink", rent_table=(10, 50, 150, 450, 625, 750)),
            UtilitySpace("Den Den Mushi Network", 12),
            PropertySpace("Loguetown", 13, cost=140, color_group="pink", rent_table=(10, 50, 150, 450, 625, 750)),
            PropertySpace("Reverse Mountain", 14, cost=160, color_group="pink", rent_table=(12, 60, 180, 500, 700, 900)),
            RailroadSpace("Sea Train Puffing Tom", 15),
            PropertySpace("Whisky Peak", 16, cost=180, color_group="orange", rent_table=(14, 70, 200, 550, 750, 950)),
            CommunityChestSpace("Treasure Chest", 17),
            PropertySpace("Little Garden", 18, cost=180, color_group="orange", rent_table=(14, 70, 200, 550, 750, 950)),
            PropertySpace("Drum Island", 19, cost=200, color_group="orange", rent_table=(16, 80, 220, 600, 800, 1000)),
            FreeParkingSpace("Sabaody Park", 20),
            # Top row (21-30)
            PropertySpace("Nanohana", 21, cost=220, color_group="red", rent_table=(18, 90, 250, 700, 875, 1050)),
            ChanceSpace("Log Pose", 22),
            PropertySpace("Rainbase", 23, cost=220, color_group="red", rent_table=(18, 90, 250, 700, 875, 1050)),
            PropertySpace("Alubarna", 24, cost=240, color_group="red", rent_table=(20, 100, 300, 750, 925, 1100)),
            RailroadSpace("Thousand Sunny", 25),
            PropertySpace("Jaya", 26, cost=260, color_group="yellow", rent_table=(22, 110, 330, 800, 975, 1150)),
            PropertySpace("Skypiea", 27, cost=260, color_group="yellow", rent_table=(22, 110, 330, 800, 975, 1150)),
            UtilitySpace("Dial Workshop", 28),
            PropertySpace("Long Ring Long Land", 29, cost=280, color_group="yellow", rent_table=(24, 120, 360, 850, 1025, 1200)),
            GoToJailSpace(),
            # Right side (31-39)
            PropertySpace("Water 7", 31, cost=300, color_group="green", rent_table=(26, 130, 390, 900, 1100, 1275)),
            PropertySpace("Enies Lobby", 32, cost=300, color_group="green", rent_table=(26, 130, 390, 900, 1100, 1275)),
            CommunityChestSpace("Treasure Chest", 33),
            PropertySpace("Thriller Bark", 34, cost=320, color_group="green", rent_table=(28, 150, 450, 1000, 1200, 1400)),
            RailroadSpace("Red Force", 35),
            ChanceSpace("Log Pose", 36),
            PropertySpace("Marineford", 37, cost=350, color_group="darkblue", rent_table=(35, 175, 500, 1100, 1300, 1500)),
            TaxSpace("World Government Tribute", 38, amount=100),
            PropertySpace("Laugh Tale", 39, cost=400, color_group="darkblue", rent_table=(50, 200, 600, 1400, 1700, 2000)),
        )

    def __len__(self) -> int:
        return len(self.spaces)

    def get_space(self, position: int) -> Space:
        """Get the space at the given position."""
        return self.spaces[position % BOARD_SIZE]

    def ownable_spaces(self) -> List[Space]:
        """Spaces that get a Property record when a game is set up."""
        return [s for s in self.spaces if s.is_ownable]

    def get_color_group(self, color: str) -> List[int]:
        """Get all property positions in a color group."""
        return [s.position for s in self.spaces if s.color == color]

    def to_dict(
        self,
        chance: Sequence[Card] = CHANCE_CARDS,
        community_chest: Sequence[Card] = COMMUNITY_CHEST_CARDS,
    ) -> Dict[str, Any]:
        """Static board definition for clients: spaces plus both decks."""
        return {
            "spaces": [s.to_dict() for s in self.spaces],
            "decks": {
                "chance": [c.to_dict() for c in chance],
                "community_chest": [c.to_dict() for c in community_chest],
            },
        }


BOARD = Board()
