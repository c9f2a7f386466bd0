"""Data models for the Swiss engine."""

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

from swisspairing.models.match_record import MatchRecord, MatchResultType
from swisspairing.models.pairing import Pairing, PairingResult
from swisspairing.models.player_record import PlayerRecord
from swisspairing.models.standing import PlayerStanding
from swisspairing.models.tournament_config import TournamentConfig
from swisspairing.models.tournament_status import TournamentStatus

__all__ = [
    "MatchRecord",
    "MatchResultType",
    "Pairing",
    "PairingResult",
    "PlayerRecord",
    "PlayerStanding",
    "TournamentConfig",
    "TournamentStatus",
]
