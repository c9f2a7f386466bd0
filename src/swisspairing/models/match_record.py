"""Match record data class and result codes."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from swisspairing.constants import (
    RESULT_DOUBLE_LOSS,
    RESULT_DRAW,
    RESULT_INTENTIONAL_DRAW,
    RESULT_PLAYER_A_DQ,
    RESULT_PLAYER_A_WIN,
    RESULT_PLAYER_B_DQ,
    RESULT_PLAYER_B_WIN,
)
from swisspairing.exceptions import InvalidResultException


class MatchResultType(Enum):
    """Outcome of a match as reported by the event staff or players.

    ``UNREPORTED`` has no wire value; it is what a ``None`` result maps to.
    """

    PLAYER_A_WIN = RESULT_PLAYER_A_WIN
    PLAYER_B_WIN = RESULT_PLAYER_B_WIN
    DRAW = RESULT_DRAW
    INTENTIONAL_DRAW = RESULT_INTENTIONAL_DRAW
    DOUBLE_LOSS = RESULT_DOUBLE_LOSS
    PLAYER_A_DQ = RESULT_PLAYER_A_DQ
    PLAYER_B_DQ = RESULT_PLAYER_B_DQ
    UNREPORTED = None

    @property
    def is_reported(self) -> bool:
        return self is not MatchResultType.UNREPORTED

    @property
    def is_draw(self) -> bool:
        return self in (MatchResultType.DRAW, MatchResultType.INTENTIONAL_DRAW)

    @classmethod
    def parse(cls, value: Union["MatchResultType", str, None]) -> "MatchResultType":
        """Convert a wire value into a result type.

        Args:
            value: A MatchResultType, one of the result code strings, or None

        Returns:
            The matching MatchResultType (None becomes UNREPORTED)

        Raises:
            InvalidResultException: If the string is not a known result code
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNREPORTED
        code = str(value).strip().upper()
        if code in cls.__members__:
            return cls[code]
        try:
            return cls(code)
        except ValueError:
            raise InvalidResultException(f"Unknown match result: {value!r}") from None


@dataclass(frozen=True)
class MatchRecord:
    """One contested match or bye slot.

    Attributes
    ----------
    player_a_id : str
        ID of the first player (the one receiving the bye for bye slots)
    player_b_id : str or None
        ID of the second player, None for a bye
    result : MatchResultType
        Reported outcome
    games_won_a : int
        Games won by player A
    games_won_b : int
        Games won by player B
    """

    player_a_id: str
    player_b_id: Optional[str] = None
    result: MatchResultType = MatchResultType.UNREPORTED
    games_won_a: int = 0
    games_won_b: int = 0

    def __post_init__(self):
        # wire strings and None are accepted and stored as the enum
        object.__setattr__(self, "result", MatchResultType.parse(self.result))
        if self.games_won_a < 0 or self.games_won_b < 0:
            raise InvalidResultException(
                f"Negative game count in match {self.player_a_id} vs {self.player_b_id}"
            )

    @property
    def is_bye(self) -> bool:
        return self.player_b_id is None

    @classmethod
    def bye(cls, player_id: str) -> "MatchRecord":
        """Build the record for a bye awarded to ``player_id``."""
        return cls(player_a_id=player_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match record to dictionary."""
        return {
            "player_a_id": self.player_a_id,
            "player_b_id": self.player_b_id,
            "result": self.result.value,
            "games_won_a": self.games_won_a,
            "games_won_b": self.games_won_b,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchRecord":
        """Deserialize match record from dictionary."""
        return cls(
            player_a_id=data["player_a_id"],
            player_b_id=data.get("player_b_id"),
            result=MatchResultType.parse(data.get("result")),
            games_won_a=int(data.get("games_won_a", 0)),
            games_won_b=int(data.get("games_won_b", 0)),
        )
