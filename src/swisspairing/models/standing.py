"""PlayerStanding data class."""

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

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class PlayerStanding:
    """A player's line in the standings after tiebreakers are applied.

    Attributes
    ----------
    user_id : str
        Player identifier
    user_name : str
        Display name
    rank : int
        1-based position, 0 until ranks are assigned
    points : int
        Match points (win 3, draw 1, loss 0)
    omw_percent : float
        Opponents' match-win percentage, each opponent floored at 1/3
    gw_percent : float
        Own game-win percentage
    ogw_percent : float
        Opponents' game-win percentage
    oomw_percent : float
        Mean of the opponents' OMW%
    received_bye : bool
        Whether the player has had a bye
    is_dropped : bool
        Whether the player has left the event
    dropped_after_round : int or None
        Round after which the player dropped, if known
    """

    user_id: str
    user_name: str
    rank: int = 0
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
    is_dropped: bool = False
    dropped_after_round: Optional[int] = None

    @property
    def matches_played(self) -> int:
        return self.match_wins + self.match_losses + self.match_draws

    @property
    def record(self) -> str:
        """Win-loss-draw string, e.g. ``"2-1-0"``."""
        return f"{self.match_wins}-{self.match_losses}-{self.match_draws}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerStanding":
        """Deserialize standing from dictionary."""
        return cls(
            user_id=data["user_id"],
            user_name=data.get("user_name", ""),
            rank=data.get("rank", 0),
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
            is_dropped=data.get("is_dropped", False),
            dropped_after_round=data.get("dropped_after_round"),
        )
