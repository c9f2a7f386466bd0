"""Swiss tournament standings and pairing engine."""

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

from swisspairing.models import (
    MatchRecord,
    MatchResultType,
    Pairing,
    PairingResult,
    PlayerRecord,
    PlayerStanding,
    TournamentConfig,
    TournamentStatus,
)
from swisspairing.pairing import SwissPairingEngine, generate_pairings
from swisspairing.tournament import (
    StandingsCalculator,
    TournamentStateEvaluator,
    calculate_standings,
    evaluate,
    get_player_records_for_pairing,
    recommended_rounds,
)

__version__ = "0.1.0"

__all__ = [
    "MatchRecord",
    "MatchResultType",
    "Pairing",
    "PairingResult",
    "PlayerRecord",
    "PlayerStanding",
    "StandingsCalculator",
    "SwissPairingEngine",
    "TournamentConfig",
    "TournamentStateEvaluator",
    "TournamentStatus",
    "calculate_standings",
    "evaluate",
    "generate_pairings",
    "get_player_records_for_pairing",
    "recommended_rounds",
]
