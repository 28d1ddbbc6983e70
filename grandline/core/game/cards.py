"""
Log Pose (chance) and Treasure Chest (community chest) card data.

The decks are supplied read-only with the board definition. No turn
transition draws from them yet; landing on a card space ends the turn.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CardType(Enum):
    """Types of card effects."""

    MOVE_TO = "move_to"
    MOVE_SPACES = "move_spaces"
    COLLECT = "collect"
    PAY = "pay"
    COLLECT_FROM_PLAYERS = "collect_from_players"
    PAY_TO_PLAYERS = "pay_to_players"
    GO_TO_JAIL = "go_to_jail"
    GET_OUT_OF_JAIL = "get_out_of_jail"


@dataclass(frozen=True)
class Card:
    """Represents a Log Pose or Treasure Chest card."""

    description: str
    card_type: CardType
    value: int = 0
    target_position: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.description,
            "type": self.card_type.value,
            "amount": self.value,
            "target": self.target_position,
        }

    def __repr__(self) -> str:
        return f"Card('{self.description}')"


CHANCE_CARDS: Tuple[Card, ...] = (
    Card("Set sail for GO (collect 200 Berries)", CardType.MOVE_TO, target_position=0),
    Card("The Log Pose points to Alubarna", CardType.MOVE_TO, target_position=24),
    Card("Ride the Sea Train to Water 7", CardType.MOVE_TO, target_position=31),
    Card("Drift back 3 spaces", CardType.MOVE_SPACES, value=-3),
    Card("Buggy's treasure map pays off: collect 50 Berries", CardType.COLLECT, value=50),
    Card("Captured by the Marines: go to Impel Down", CardType.GO_TO_JAIL),
    Card("Vivi's pardon: get out of Impel Down free", CardType.GET_OUT_OF_JAIL),
    Card("Pay the Franky Family 15 Berries for repairs", CardType.PAY, value=15),
    Card("Throw a party for the crew: pay each player 50 Berries", CardType.PAY_TO_PLAYERS, value=50),
    Card("Your bounty rises: collect 150 Berries", CardType.COLLECT, value=150),
)

COMMUNITY_CHEST_CARDS: Tuple[Card, ...] = (
    Card("Set sail for GO (collect 200 Berries)", CardType.MOVE_TO, target_position=0),
    Card("Found buried gold on Jaya: collect 200 Berries", CardType.COLLECT, value=200),
    Card("Chopper's medical bill: pay 50 Berries", CardType.PAY, value=50),
    Card("Sold a Dial: collect 50 Berries", CardType.COLLECT, value=50),
    Card("Kidnapped by Enies Lobby agents: go to Impel Down", CardType.GO_TO_JAIL),
    Card("Crocus forgets to charge you: get out of Impel Down free", CardType.GET_OUT_OF_JAIL),
    Card("Sanji's birthday banquet: collect 10 Berries from every player", CardType.COLLECT_FROM_PLAYERS, value=10),
    Card("Nami collects her cut: pay 100 Berries", CardType.PAY, value=100),
    Card("Win the Davy Back Fight: collect 100 Berries", CardType.COLLECT, value=100),
    Card("Inherit a Devil Fruit stash: collect 100 Berries", CardType.COLLECT, value=100),
)
