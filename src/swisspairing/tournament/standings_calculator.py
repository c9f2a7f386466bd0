"""Standings calculation for Swiss events.

This module folds a match history into per-player statistics, applies the
OMW% / GW% / OGW% / OOMW% tiebreakers and ranks the field.
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

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional

from swisspairing.constants import (
    BYE_POINTS,
    DRAW_POINTS,
    DRAW_WIN_RATE_WEIGHT,
    OMW_FLOOR,
    TIEBREAK_SORT_ORDER,
    TIEBREAK_TOLERANCE,
    UNKNOWN_PLAYER_NAME,
    WIN_POINTS,
)
from swisspairing.models import MatchRecord, MatchResultType, PlayerRecord, PlayerStanding
from swisspairing.type_hints import DroppedPlayers, DropRounds, PlayerNames
from swisspairing.utils import setup_logger, user_id_key

logger = setup_logger(__name__)


@dataclass
class _PlayerStats:
    """Running totals for one player while the match history is folded."""

    user_id: str
    user_name: str
    points: int = 0
    match_wins: int = 0
    match_losses: int = 0
    match_draws: int = 0
    game_wins: int = 0
    game_losses: int = 0
    opponent_ids: List[str] = field(default_factory=list)
    received_bye: bool = False
    is_dropped: bool = False
    dropped_after_round: Optional[int] = None

    @property
    def matches_played(self) -> int:
        return self.match_wins + self.match_losses + self.match_draws

    def record_win(self, points: int = WIN_POINTS) -> None:
        self.points += points
        self.match_wins += 1

    def record_loss(self) -> None:
        self.match_losses += 1

    def record_draw(self) -> None:
        self.points += DRAW_POINTS
        self.match_draws += 1


def compare_standings(a: PlayerStanding, b: PlayerStanding) -> int:
    """Order two standings, better player first.

    Points decide first, then each tiebreaker in turn. Percentages closer
    than TIEBREAK_TOLERANCE count as equal. Anything still tied is ordered
    by user id so the ranking never depends on input order.

    Returns:
        Negative if ``a`` ranks above ``b``, positive if below, 0 if identical
    """
    if a.points != b.points:
        return b.points - a.points

    for key in TIEBREAK_SORT_ORDER:
        diff = getattr(b, key) - getattr(a, key)
        if abs(diff) > TIEBREAK_TOLERANCE:
            return -1 if diff < 0 else 1

    key_a, key_b = user_id_key(a.user_id), user_id_key(b.user_id)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


class StandingsCalculator:
    """Calculates ranked standings from a match history.

    Tiebreakers, in priority order after match points:

    - OMW%: mean of each opponent's match-win rate, floored at 1/3
    - GW%: own games won over games played
    - OGW%: mean of each opponent's GW%
    - OOMW%: mean of each opponent's OMW%

    Every call starts from zero; nothing is cached between calls.
    """

    def calculate_standings(
        self,
        player_ids: Iterable[str],
        player_names: Optional[PlayerNames] = None,
        matches: Iterable[MatchRecord] = (),
        dropped_players: Optional[DroppedPlayers] = None,
        total_completed_rounds: int = 0,
        dropped_after_round: Optional[DropRounds] = None,
    ) -> List[PlayerStanding]:
        """Calculate standings for every supplied player.

        Args:
            player_ids: Unique player ids; each produces exactly one standing
            player_names: Optional id -> display name map
            matches: Match history in play order, may include unreported matches
            dropped_players: Ids of players who have left the event
            total_completed_rounds: Completed round count; when positive,
                dropped players take a loss for every round they missed
            dropped_after_round: Optional id -> round the player dropped after

        Returns:
            Standings sorted best first with ranks 1..N assigned
        """
        stats = self._build_stats(
            player_ids, player_names or {}, dropped_players or set(), dropped_after_round or {}
        )
        self._apply_matches(stats, matches)
        if total_completed_rounds > 0:
            self._apply_missed_round_losses(
                stats, total_completed_rounds, dropped_after_round or {}
            )

        standings = self._build_standings(stats)
        standings.sort(key=cmp_to_key(compare_standings))
        for index, standing in enumerate(standings, start=1):
            standing.rank = index

        logger.debug(
            "Calculated standings for %s players from %s matches",
            len(standings),
            sum(s.matches_played for s in standings),
        )
        return standings

    def get_player_records_for_pairing(
        self,
        player_ids: Iterable[str],
        player_names: Optional[PlayerNames] = None,
        matches: Iterable[MatchRecord] = (),
        dropped_players: Optional[DroppedPlayers] = None,
        total_completed_rounds: int = 0,
        dropped_after_round: Optional[DropRounds] = None,
    ) -> List[PlayerRecord]:
        """Build the pairing engine's input from the same data as the standings.

        Records come back in standings order. Opponent histories keep every
        meeting, so a rematch shows up as a duplicate id.

        Returns:
            One PlayerRecord per supplied player id
        """
        player_ids = list(player_ids)
        matches = list(matches)
        standings = self.calculate_standings(
            player_ids,
            player_names,
            matches,
            dropped_players,
            total_completed_rounds,
            dropped_after_round,
        )
        history = self._opponent_history(player_ids, matches)
        return [
            PlayerRecord.from_standing(standing, history[standing.user_id])
            for standing in standings
        ]

    # ------------------------------------------------------------------
    # Folding the match history
    # ------------------------------------------------------------------

    def _build_stats(
        self,
        player_ids: Iterable[str],
        player_names: PlayerNames,
        dropped_players: DroppedPlayers,
        dropped_after_round: DropRounds,
    ) -> Dict[str, _PlayerStats]:
        stats: Dict[str, _PlayerStats] = {}
        for player_id in player_ids:
            if player_id in stats:
                logger.debug("Duplicate player id %s ignored", player_id)
                continue
            stats[player_id] = _PlayerStats(
                user_id=player_id,
                user_name=player_names.get(player_id, UNKNOWN_PLAYER_NAME),
                is_dropped=player_id in dropped_players,
                dropped_after_round=dropped_after_round.get(player_id),
            )
        return stats

    def _apply_matches(
        self, stats: Dict[str, _PlayerStats], matches: Iterable[MatchRecord]
    ) -> None:
        for match in matches:
            player_a = stats.get(match.player_a_id)
            if player_a is None:
                logger.debug("Skipping match for unknown player %s", match.player_a_id)
                continue

            if match.is_bye:
                player_a.record_win(BYE_POINTS)
                player_a.received_bye = True
                continue

            player_b = stats.get(match.player_b_id)
            if player_b is None:
                logger.debug("Skipping match for unknown player %s", match.player_b_id)
                continue

            if not match.result.is_reported:
                continue

            player_a.opponent_ids.append(player_b.user_id)
            player_b.opponent_ids.append(player_a.user_id)

            # Game counts are taken before looking at the result
            player_a.game_wins += match.games_won_a
            player_a.game_losses += match.games_won_b
            player_b.game_wins += match.games_won_b
            player_b.game_losses += match.games_won_a

            self._apply_result(match.result, player_a, player_b)

    @staticmethod
    def _apply_result(
        result: MatchResultType, player_a: _PlayerStats, player_b: _PlayerStats
    ) -> None:
        if result is MatchResultType.PLAYER_A_WIN:
            player_a.record_win()
            player_b.record_loss()
        elif result is MatchResultType.PLAYER_B_WIN:
            player_b.record_win()
            player_a.record_loss()
        elif result is MatchResultType.DRAW or result is MatchResultType.INTENTIONAL_DRAW:
            player_a.record_draw()
            player_b.record_draw()
        elif result is MatchResultType.DOUBLE_LOSS:
            player_a.record_loss()
            player_b.record_loss()
        elif result is MatchResultType.PLAYER_A_DQ:
            player_b.record_win()
            player_a.record_loss()
        elif result is MatchResultType.PLAYER_B_DQ:
            player_a.record_win()
            player_b.record_loss()
        else:
            raise AssertionError(f"Unhandled match result {result!r}")

    def _apply_missed_round_losses(
        self,
        stats: Dict[str, _PlayerStats],
        total_completed_rounds: int,
        dropped_after_round: DropRounds,
    ) -> None:
        """Give dropped players a loss for each completed round they sat out."""
        for player in stats.values():
            if not player.is_dropped:
                continue
            last_round_played = max(
                dropped_after_round.get(player.user_id, 0), player.matches_played
            )
            missed_rounds = total_completed_rounds - last_round_played
            if missed_rounds > 0:
                player.match_losses += missed_rounds
                logger.debug(
                    "Added %s missed-round losses for dropped player %s",
                    missed_rounds,
                    player.user_id,
                )

    # ------------------------------------------------------------------
    # Tiebreakers
    # ------------------------------------------------------------------

    def _build_standings(self, stats: Dict[str, _PlayerStats]) -> List[PlayerStanding]:
        # OOMW% reads the OMW% values, so those are computed once up front
        omw = {pid: self._calculate_omw(player, stats) for pid, player in stats.items()}
        gw = {pid: self._calculate_gw(player) for pid, player in stats.items()}

        standings = []
        for player in stats.values():
            standings.append(
                PlayerStanding(
                    user_id=player.user_id,
                    user_name=player.user_name,
                    points=player.points,
                    match_wins=player.match_wins,
                    match_losses=player.match_losses,
                    match_draws=player.match_draws,
                    game_wins=player.game_wins,
                    game_losses=player.game_losses,
                    omw_percent=omw[player.user_id],
                    gw_percent=gw[player.user_id],
                    ogw_percent=self._calculate_ogw(player, gw),
                    oomw_percent=self._calculate_oomw(player, omw),
                    received_bye=player.received_bye,
                    is_dropped=player.is_dropped,
                    dropped_after_round=player.dropped_after_round,
                )
            )
        return standings

    @staticmethod
    def _match_win_rate(player: _PlayerStats) -> Optional[float]:
        """Return (wins + half of draws) / matches, or None with no matches."""
        total = player.matches_played
        if total == 0:
            return None
        return (player.match_wins + DRAW_WIN_RATE_WEIGHT * player.match_draws) / total

    def _calculate_omw(
        self, player: _PlayerStats, stats: Dict[str, _PlayerStats]
    ) -> float:
        """Calculate Opponents' Match-Win % with the 1/3 floor.

        A dropped opponent always counts at the floor.
        """
        if not player.opponent_ids:
            return OMW_FLOOR

        total = 0.0
        for opponent_id in player.opponent_ids:
            opponent = stats[opponent_id]
            win_rate = self._match_win_rate(opponent)
            if opponent.is_dropped or win_rate is None:
                total += OMW_FLOOR
            else:
                total += max(win_rate, OMW_FLOOR)
        return total / len(player.opponent_ids)

    @staticmethod
    def _calculate_gw(player: _PlayerStats) -> float:
        """Calculate Game-Win %."""
        total_games = player.game_wins + player.game_losses
        if total_games == 0:
            return 0.0
        return player.game_wins / total_games

    @staticmethod
    def _calculate_ogw(player: _PlayerStats, gw: Dict[str, float]) -> float:
        if not player.opponent_ids:
            return 0.0
        return sum(gw[opp] for opp in player.opponent_ids) / len(player.opponent_ids)

    @staticmethod
    def _calculate_oomw(player: _PlayerStats, omw: Dict[str, float]) -> float:
        if not player.opponent_ids:
            return OMW_FLOOR
        return sum(omw[opp] for opp in player.opponent_ids) / len(player.opponent_ids)

    @staticmethod
    def _opponent_history(
        player_ids: List[str], matches: List[MatchRecord]
    ) -> Dict[str, List[str]]:
        """Ordered opponent ids per player, rematches kept."""
        history: Dict[str, List[str]] = {pid: [] for pid in player_ids}
        for match in matches:
            if match.is_bye or not match.result.is_reported:
                continue
            if match.player_a_id not in history or match.player_b_id not in history:
                continue
            history[match.player_a_id].append(match.player_b_id)
            history[match.player_b_id].append(match.player_a_id)
        return history


def calculate_standings(
    player_ids: Iterable[str],
    player_names: Optional[PlayerNames] = None,
    matches: Iterable[MatchRecord] = (),
    dropped_players: Optional[DroppedPlayers] = None,
    total_completed_rounds: int = 0,
    dropped_after_round: Optional[DropRounds] = None,
) -> List[PlayerStanding]:
    """Module-level shortcut for StandingsCalculator().calculate_standings."""
    return StandingsCalculator().calculate_standings(
        player_ids,
        player_names,
        matches,
        dropped_players,
        total_completed_rounds,
        dropped_after_round,
    )


def get_player_records_for_pairing(
    player_ids: Iterable[str],
    player_names: Optional[PlayerNames] = None,
    matches: Iterable[MatchRecord] = (),
    dropped_players: Optional[DroppedPlayers] = None,
    total_completed_rounds: int = 0,
    dropped_after_round: Optional[DropRounds] = None,
) -> List[PlayerRecord]:
    """Module-level shortcut for StandingsCalculator().get_player_records_for_pairing."""
    return StandingsCalculator().get_player_records_for_pairing(
        player_ids,
        player_names,
        matches,
        dropped_players,
        total_completed_rounds,
        dropped_after_round,
    )
