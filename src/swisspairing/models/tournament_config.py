"""TournamentConfig data class."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

from swisspairing.constants import DEFAULT_TOP_CUT_SIZE
from swisspairing.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Per-event settings the caller hands to the engine.

    Attributes
    ----------
    name : str
        Tournament name.
    total_rounds_planned : int or None
        Round count override; None means use the recommended count.
    avoid_rematches : bool
        Prefer opponents a player has not met yet.
    top_cut_size : int
        Number of places inside the top cut, used for intentional-draw offers.
    deterministic_pairing : bool
        Order OMW%-tied players by id instead of shuffling them.
    seed : int or None
        Seed for the pairing shuffle; None gives an unseeded generator.
    """

    name: str = "Untitled Tournament"
    total_rounds_planned: Optional[int] = None
    avoid_rematches: bool = True
    top_cut_size: int = DEFAULT_TOP_CUT_SIZE
    deterministic_pairing: bool = False
    seed: Optional[int] = None

    def validate(self) -> None:
        """Check the configuration values.

        Raises:
            InvalidConfigurationException: If a value is out of range
        """
        if self.total_rounds_planned is not None and self.total_rounds_planned < 0:
            raise InvalidConfigurationException(
                f"total_rounds_planned must be >= 0, got {self.total_rounds_planned}"
            )
        if self.top_cut_size < 0:
            raise InvalidConfigurationException(
                f"top_cut_size must be >= 0, got {self.top_cut_size}"
            )

    def make_rng(self) -> random.Random:
        """Create the random source used to shuffle tied players."""
        return random.Random(self.seed) if self.seed is not None else random.Random()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "total_rounds_planned": self.total_rounds_planned,
            "avoid_rematches": self.avoid_rematches,
            "top_cut_size": self.top_cut_size,
            "deterministic_pairing": self.deterministic_pairing,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        config = cls(
            name=data.get("name", "Untitled Tournament"),
            total_rounds_planned=data.get("total_rounds_planned"),
            avoid_rematches=data.get("avoid_rematches", True),
            top_cut_size=data.get("top_cut_size", DEFAULT_TOP_CUT_SIZE),
            deterministic_pairing=data.get("deterministic_pairing", False),
            seed=data.get("seed"),
        )
        config.validate()
        return config
