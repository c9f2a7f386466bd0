"""Tournament state evaluation.

This module decides whether a Swiss event is finished, whether another round
may be paired, and which players can still finish first.
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

import math
from typing import Iterable, List, Optional, Sequence

from swisspairing.constants import DEFAULT_TOP_CUT_SIZE, WIN_POINTS
from swisspairing.models import MatchRecord, PlayerStanding, TournamentStatus
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def recommended_rounds(player_count: int) -> int:
    """Number of Swiss rounds for a field of ``player_count`` players.

    ceil(log2(n)) rounds leave room for exactly one undefeated player:

    - 2 players: 1 round
    - 3-4 players: 2 rounds
    - 5-8 players: 3 rounds
    - 9-16 players: 4 rounds
    - 17-32 players: 5 rounds
    """
    if player_count <= 1:
        return 0
    if player_count == 2:
        return 1
    return math.ceil(math.log2(player_count))


def get_minimum_rounds_for_clear_winner(player_count: int) -> int:
    """Fewest rounds after which a unique undefeated player is possible."""
    return recommended_rounds(player_count)


def get_max_points_after_rounds(rounds: int) -> int:
    """Most points a player can collect in ``rounds`` rounds."""
    return rounds * WIN_POINTS


def can_player_still_win(
    player_points: int, leader_points: int, rounds_remaining: int
) -> bool:
    """Check whether winning every remaining round reaches the leader."""
    return player_points + get_max_points_after_rounds(rounds_remaining) >= leader_points


def get_players_in_contention(
    standings: Sequence[PlayerStanding], rounds_remaining: int
) -> List[PlayerStanding]:
    """Return the non-dropped players who can still catch the leader.

    The leader is the highest placed player who has not dropped, so
    ``standings`` is expected in rank order.
    """
    active = [s for s in standings if not s.is_dropped]
    if not active:
        return []
    leader_points = active[0].points
    return [
        s
        for s in active
        if can_player_still_win(s.points, leader_points, rounds_remaining)
    ]


def should_offer_intentional_draw(
    standing_a: PlayerStanding,
    standing_b: PlayerStanding,
    rounds_remaining: int,
    top_cut_size: int = DEFAULT_TOP_CUT_SIZE,
) -> bool:
    """Decide whether two players may agree an intentional draw.

    Only allowed in the last round, and only when both players currently
    sit inside the top cut.
    """
    if rounds_remaining > 1:
        return False
    return standing_a.rank <= top_cut_size and standing_b.rank <= top_cut_size


def are_all_matches_reported(matches: Iterable[MatchRecord]) -> bool:
    """Check that every contested match in a round has a result.

    Byes need no report.
    """
    return all(match.is_bye or match.result.is_reported for match in matches)


class TournamentStateEvaluator:
    """Decides if an event is complete and whether another round can start."""

    def evaluate(
        self,
        player_count: int,
        current_round: int,
        total_rounds_planned: Optional[int],
        standings: Sequence[PlayerStanding],
        all_matches_reported: bool,
    ) -> TournamentStatus:
        """Evaluate the event after ``current_round``.

        The event is complete when any of these hold:

        1. The target round count has been played and reported. The target
           is ``total_rounds_planned`` or, if None, the recommended count.
        2. At most one player has not dropped.
        3. The recommended round count has been played and reported and
           exactly one active player is undefeated. This check always uses
           the recommended count, whatever was planned.

        Args:
            player_count: Number of players registered
            current_round: Last round started (0 before the first round)
            total_rounds_planned: Organizer's round count, or None
            standings: Current standings
            all_matches_reported: Whether every match of ``current_round`` has a result

        Returns:
            The computed TournamentStatus
        """
        rounds = recommended_rounds(player_count)
        target_rounds = total_rounds_planned if total_rounds_planned is not None else rounds
        players_remaining = sum(1 for s in standings if not s.is_dropped)

        is_complete = False
        reason: Optional[str] = None

        if current_round >= target_rounds and all_matches_reported:
            is_complete = True
            reason = f"All {target_rounds} rounds completed"

        if players_remaining <= 1:
            is_complete = True
            if players_remaining == 0:
                reason = "All players dropped"
            else:
                reason = "Insufficient players remaining"

        if not is_complete and current_round >= rounds and all_matches_reported:
            undefeated = [
                s for s in standings if not s.is_dropped and s.match_losses == 0
            ]
            if len(undefeated) == 1:
                is_complete = True
                reason = f"Undefeated champion: {undefeated[0].user_name}"

        can_start_next_round = (
            not is_complete and all_matches_reported and players_remaining > 1
        )
        if not is_complete and not can_start_next_round:
            reason = "Pending matches must be reported"

        logger.info(
            "Round %s status: complete=%s can_start_next=%s remaining=%s (%s)",
            current_round,
            is_complete,
            can_start_next_round,
            players_remaining,
            reason,
        )
        return TournamentStatus(
            is_complete=is_complete,
            can_start_next_round=can_start_next_round,
            recommended_rounds=rounds,
            current_round=current_round,
            players_remaining=players_remaining,
            reason=reason,
        )


def evaluate(
    player_count: int,
    current_round: int,
    total_rounds_planned: Optional[int],
    standings: Sequence[PlayerStanding],
    all_matches_reported: bool,
) -> TournamentStatus:
    """Module-level shortcut for TournamentStateEvaluator().evaluate."""
    return TournamentStateEvaluator().evaluate(
        player_count,
        current_round,
        total_rounds_planned,
        standings,
        all_matches_reported,
    )
