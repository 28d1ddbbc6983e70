"""Preset AI opponents offered when setting up a game."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from grandline.core.game.state import AIDifficulty


@dataclass(frozen=True)
class CrewMember:
    name: str
    difficulty: AIDifficulty
    description: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["difficulty"] = self.difficulty.value
        return data


CREW: Tuple[CrewMember, ...] = (
    CrewMember("Monkey D. Luffy", AIDifficulty.EASY, "Reckless and impulsive"),
    CrewMember("Roronoa Zoro", AIDifficulty.MEDIUM, "Steady and reliable"),
    CrewMember("Nami", AIDifficulty.HARD, "Money-focused strategist"),
    CrewMember("Sanji", AIDifficulty.MEDIUM, "Balanced approach"),
    CrewMember("Tony Tony Chopper", AIDifficulty.EASY, "Innocent and trusting"),
    CrewMember("Nico Robin", AIDifficulty.HARD, "Calculating and strategic"),
    CrewMember("Franky", AIDifficulty.MEDIUM, "Bold but thoughtful"),
    CrewMember("Brook", AIDifficulty.EASY, "Carefree and lucky"),
)
