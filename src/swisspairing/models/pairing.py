"""Pairing and PairingResult data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Pairing:
    """A table assignment for one round.

    Attributes
    ----------
    table_number : int
        1-based table, sequential with no gaps
    player_a_id : str
        First player
    player_b_id : str or None
        Second player, None when ``player_a_id`` has the bye
    """

    table_number: int
    player_a_id: str
    player_b_id: Optional[str] = None

    @property
    def is_bye(self) -> bool:
        return self.player_b_id is None

    @property
    def player_ids(self) -> List[str]:
        if self.player_b_id is None:
            return [self.player_a_id]
        return [self.player_a_id, self.player_b_id]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "table_number": self.table_number,
            "player_a_id": self.player_a_id,
            "player_b_id": self.player_b_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        return cls(
            table_number=data["table_number"],
            player_a_id=data["player_a_id"],
            player_b_id=data.get("player_b_id"),
        )


@dataclass
class PairingResult:
    """Result of a pairing computation for a single round."""

    pairings: List[Pairing] = field(default_factory=list)
    bye_player_id: Optional[str] = None
    # players the greedy float step could not place
    unpaired_player_ids: List[str] = field(default_factory=list)

    @property
    def contested_pairings(self) -> List[Pairing]:
        return [p for p in self.pairings if not p.is_bye]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing result to dictionary."""
        return {
            "pairings": [p.to_dict() for p in self.pairings],
            "bye_player_id": self.bye_player_id,
            "unpaired_player_ids": list(self.unpaired_player_ids),
        }


#  LocalWords:  PairingResult
