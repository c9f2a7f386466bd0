"""TournamentStatus data class."""

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
class TournamentStatus:
    """Answer to "is the event over, and may another round start?".

    Attributes
    ----------
    is_complete : bool
        The event should be closed
    can_start_next_round : bool
        Another round may be paired now
    recommended_rounds : int
        ceil(log2(player_count)) style round count for this field size
    current_round : int
        Round number the status was computed for
    players_remaining : int
        Players who have not dropped
    reason : str or None
        Human readable explanation, when there is one
    """

    is_complete: bool
    can_start_next_round: bool
    recommended_rounds: int
    current_round: int
    players_remaining: int
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize status to dictionary."""
        return asdict(self)
