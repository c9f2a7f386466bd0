"""PlayerRecord data class."""

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
from typing import Any, Dict, List

from swisspairing.models.standing import PlayerStanding


@dataclass
class PlayerRecord:
    """Everything the pairing engine needs to know about one player.

    ``opponent_ids`` holds every previous opponent in play order; an
    opponent met twice appears twice.
    """

    user_id: str
    user_name: str = ""
    points: int = 0
    match_wins: int = 0
    match_losses: int = 0
    match_draws: int = 0
    game_wins: int = 0
    game_losses: int = 0
    omw_percent: float = 0.0
    gw_percent: float = 0.0
    ogw_percent: float = 0.0
    oomw_percent: float = 0.0
    received_bye: bool = False
    opponent_ids: List[str] = field(default_factory=list)

    def has_played(self, opponent_id: str) -> bool:
        """Check if this player has already faced ``opponent_id``."""
        return opponent_id in self.opponent_ids

    @classmethod
    def from_standing(
        cls, standing: PlayerStanding, opponent_ids: List[str]
    ) -> "PlayerRecord":
        """Build a pairing record from a computed standing."""
        return cls(
            user_id=standing.user_id,
            user_name=standing.user_name,
            points=standing.points,
            match_wins=standing.match_wins,
            match_losses=standing.match_losses,
            match_draws=standing.match_draws,
            game_wins=standing.game_wins,
            game_losses=standing.game_losses,
            omw_percent=standing.omw_percent,
            gw_percent=standing.gw_percent,
            ogw_percent=standing.ogw_percent,
            oomw_percent=standing.oomw_percent,
            received_bye=standing.received_bye,
            opponent_ids=list(opponent_ids),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player record to dictionary."""
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "points": self.points,
            "match_wins": self.match_wins,
            "match_losses": self.match_losses,
            "match_draws": self.match_draws,
            "game_wins": self.game_wins,
            "game_losses": self.game_losses,
            "omw_percent": self.omw_percent,
            "gw_percent": self.gw_percent,
            "ogw_percent": self.ogw_percent,
            "oomw_percent": self.oomw_percent,
            "received_bye": self.received_bye,
            "opponent_ids": list(self.opponent_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerRecord":
        """Deserialize player record from dictionary."""
        return cls(
            user_id=data["user_id"],
            user_name=data.get("user_name", ""),
            points=data.get("points", 0),
            match_wins=data.get("match_wins", 0),
            match_losses=data.get("match_losses", 0),
            match_draws=data.get("match_draws", 0),
            game_wins=data.get("game_wins", 0),
            game_losses=data.get("game_losses", 0),
            omw_percent=data.get("omw_percent", 0.0),
            gw_percent=data.get("gw_percent", 0.0),
            ogw_percent=data.get("ogw_percent", 0.0),
            oomw_percent=data.get("oomw_percent", 0.0),
            received_bye=data.get("received_bye", False),
            opponent_ids=list(data.get("opponent_ids", [])),
        )
