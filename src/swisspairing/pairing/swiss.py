"""Swiss Pairing System Implementation.

Players are grouped into point buckets and paired greedily from the top
bucket down. A bucket with an odd player out floats that player into the
next bucket below. An odd field hands one bye to the lowest placed player
who has not had one yet.
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

import random
from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence, Set, Tuple

from swisspairing.constants import TIEBREAK_TOLERANCE
from swisspairing.exceptions import NoPairingAvailableException
from swisspairing.models import Pairing, PairingResult, PlayerRecord, TournamentConfig
from swisspairing.type_hints import Buckets, PlayerPair
from swisspairing.utils import setup_logger, user_id_key

logger = setup_logger(__name__)


def find_best_opponent(
    player: PlayerRecord,
    candidates: Sequence[PlayerRecord],
    avoid_rematches: bool,
) -> Optional[PlayerRecord]:
    """Pick an opponent for ``player`` from the ordered ``candidates``.

    With rematch avoidance the first candidate the player has not met wins;
    otherwise, or when everyone is a rematch, the first candidate is taken.

    Returns:
        The chosen candidate, or None if there are no candidates
    """
    if not candidates:
        return None
    if avoid_rematches:
        for candidate in candidates:
            if not player.has_played(candidate.user_id):
                return candidate
    return candidates[0]


def _compare_for_bye(a: PlayerRecord, b: PlayerRecord) -> int:
    """Lowest OMW% first, ties within tolerance broken by user id."""
    diff = a.omw_percent - b.omw_percent
    if abs(diff) > TIEBREAK_TOLERANCE:
        return -1 if diff < 0 else 1
    key_a, key_b = user_id_key(a.user_id), user_id_key(b.user_id)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


class SwissPairingEngine:
    """Generates one round of Swiss pairings.

    Players tied on points and OMW% are ordered by a shuffle drawn from
    ``rng``. Pass a seeded ``random.Random`` for reproducible pairings, or
    ``deterministic=True`` to order those ties by user id instead.
    """

    def __init__(
        self, rng: Optional[random.Random] = None, deterministic: bool = False
    ):
        self.rng = rng if rng is not None else random.Random()
        self.deterministic = deterministic

    @classmethod
    def from_config(cls, config: TournamentConfig) -> "SwissPairingEngine":
        """Build an engine from a tournament's pairing settings."""
        return cls(rng=config.make_rng(), deterministic=config.deterministic_pairing)

    def generate_pairings(
        self, players: Sequence[PlayerRecord], avoid_rematches: bool = True
    ) -> PairingResult:
        """Pair the next round.

        Args:
            players: Players to pair (dropped players already removed)
            avoid_rematches: Prefer opponents a player has not met

        Returns:
            PairingResult with sequential table numbers; the bye, if any,
            takes the table after the last contested pairing

        Raises:
            NoPairingAvailableException: If a bye is needed but nobody can take it
        """
        if not players:
            return PairingResult()

        if len(players) == 1:
            only = players[0].user_id
            logger.info("Single player %s receives an automatic bye", only)
            return PairingResult(
                pairings=[Pairing(table_number=1, player_a_id=only)],
                bye_player_id=only,
            )

        buckets = self.bucket_players(players)

        bye_player_id: Optional[str] = None
        if len(players) % 2 == 1:
            bye_player_id = self.select_bye_player(buckets).user_id
            buckets = _without_player(buckets, bye_player_id)

        pairs, unpaired = self._pair_by_buckets(buckets, avoid_rematches)

        pairings = [
            Pairing(table_number=table, player_a_id=a, player_b_id=b)
            for table, (a, b) in enumerate(pairs, start=1)
        ]
        if bye_player_id is not None:
            pairings.append(
                Pairing(table_number=len(pairings) + 1, player_a_id=bye_player_id)
            )

        logger.info(
            "Paired %s players into %s tables (bye: %s, unpaired: %s)",
            len(players),
            len(pairings),
            bye_player_id,
            len(unpaired),
        )
        return PairingResult(
            pairings=pairings,
            bye_player_id=bye_player_id,
            unpaired_player_ids=unpaired,
        )

    def bucket_players(self, players: Sequence[PlayerRecord]) -> Buckets:
        """Group players by points, each bucket ordered by OMW% descending."""
        buckets: Buckets = {}
        for player in players:
            buckets.setdefault(player.points, []).append(player)

        for points, bucket in buckets.items():
            if self.deterministic:
                bucket.sort(key=lambda p: (-p.omw_percent, user_id_key(p.user_id)))
            else:
                # shuffle first so the stable sort leaves OMW% ties in random order
                self.rng.shuffle(bucket)
                bucket.sort(key=lambda p: -p.omw_percent)
        return buckets

    def select_bye_player(self, buckets: Buckets) -> PlayerRecord:
        """Choose who sits out this round.

        Buckets are scanned from the fewest points up. The first bucket
        containing players without a bye gives the bye to its lowest OMW%
        player. When everyone has already had a bye, the last player of the
        lowest bucket takes it again.

        Raises:
            NoPairingAvailableException: If every bucket is empty
        """
        points_ascending = sorted(buckets)

        for points in points_ascending:
            eligible = [p for p in buckets[points] if not p.received_bye]
            if eligible:
                return sorted(eligible, key=cmp_to_key(_compare_for_bye))[0]

        for points in points_ascending:
            if buckets[points]:
                fallback = buckets[points][-1]
                logger.info(
                    "Every player has had a bye; %s receives another", fallback.user_id
                )
                return fallback

        raise NoPairingAvailableException("No player available for bye")

    def _pair_by_buckets(
        self, buckets: Buckets, avoid_rematches: bool
    ) -> Tuple[List[PlayerPair], List[str]]:
        """Pair buckets from the most points down.

        A bucket's odd player out is offered to the next lower bucket only.
        If that bucket has nobody left, or there is no lower bucket, the
        player stays unpaired this round.

        Returns:
            (pairs in table order, ids left unpaired)
        """
        points_descending = sorted(buckets, reverse=True)
        paired: Set[str] = set()
        pairs: List[PlayerPair] = []
        unpaired: List[str] = []

        for index, points in enumerate(points_descending):
            remaining = [p for p in buckets[points] if p.user_id not in paired]
            if not remaining:
                continue

            for player_a, player_b in _pair_within_bucket(remaining, avoid_rematches):
                pairs.append((player_a.user_id, player_b.user_id))
                paired.update((player_a.user_id, player_b.user_id))

            leftovers = [p for p in remaining if p.user_id not in paired]
            if not leftovers:
                continue

            floater = leftovers[0]
            candidates: List[PlayerRecord] = []
            if index + 1 < len(points_descending):
                lower_points = points_descending[index + 1]
                candidates = [
                    p for p in buckets[lower_points] if p.user_id not in paired
                ]

            opponent = find_best_opponent(floater, candidates, avoid_rematches)
            if opponent is None:
                logger.warning(
                    "Floater %s (%s points) has no opponent in the next bucket "
                    "and is left unpaired",
                    floater.user_id,
                    points,
                )
                unpaired.append(floater.user_id)
                continue

            logger.debug(
                "Floating %s from %s to %s points",
                floater.user_id,
                points,
                opponent.points,
            )
            pairs.append((floater.user_id, opponent.user_id))
            paired.update((floater.user_id, opponent.user_id))

        return pairs, unpaired


def _pair_within_bucket(
    players: List[PlayerRecord], avoid_rematches: bool
) -> List[Tuple[PlayerRecord, PlayerRecord]]:
    """Greedily pair a bucket in order; an odd player is left over."""
    pairs = []
    pool = list(players)
    while len(pool) >= 2:
        player = pool.pop(0)
        opponent = find_best_opponent(player, pool, avoid_rematches)
        pool = [p for p in pool if p is not opponent]
        pairs.append((player, opponent))
    return pairs


def _without_player(buckets: Buckets, player_id: str) -> Buckets:
    """Copy of ``buckets`` with one player removed and empty buckets dropped."""
    trimmed: Dict[int, List[PlayerRecord]] = {}
    for points, bucket in buckets.items():
        kept = [p for p in bucket if p.user_id != player_id]
        if kept:
            trimmed[points] = kept
    return trimmed


def generate_pairings(
    players: Sequence[PlayerRecord],
    avoid_rematches: bool = True,
    rng: Optional[random.Random] = None,
    deterministic: bool = False,
) -> PairingResult:
    """Module-level shortcut for SwissPairingEngine(...).generate_pairings."""
    engine = SwissPairingEngine(rng=rng, deterministic=deterministic)
    return engine.generate_pairings(players, avoid_rematches)
