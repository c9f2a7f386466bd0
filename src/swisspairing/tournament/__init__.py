"""Standings and tournament state for Swiss events.

This package turns a match history into ranked standings and decides when
an event is over.
"""

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

from swisspairing.tournament.standings_calculator import (
    StandingsCalculator,
    calculate_standings,
    compare_standings,
    get_player_records_for_pairing,
)
from swisspairing.tournament.state_evaluator import (
    TournamentStateEvaluator,
    are_all_matches_reported,
    can_player_still_win,
    evaluate,
    get_max_points_after_rounds,
    get_minimum_rounds_for_clear_winner,
    get_players_in_contention,
    recommended_rounds,
    should_offer_intentional_draw,
)

__all__ = [
    "StandingsCalculator",
    "TournamentStateEvaluator",
    "are_all_matches_reported",
    "calculate_standings",
    "can_player_still_win",
    "compare_standings",
    "evaluate",
    "get_max_points_after_rounds",
    "get_minimum_rounds_for_clear_winner",
    "get_player_records_for_pairing",
    "get_players_in_contention",
    "recommended_rounds",
    "should_offer_intentional_draw",
]
