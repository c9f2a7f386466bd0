"""Type hints used in Swiss Pairing."""

from typing import Dict, List, Mapping, Set, Tuple

# A player's identifier as handed to us by the caller
PlayerId = str

# player id -> display name
PlayerNames = Mapping[PlayerId, str]
# ids of players who have left the event
DroppedPlayers = Set[PlayerId]
# player id -> round after which they dropped
DropRounds = Dict[PlayerId, int]

# Players sharing a point total, keyed by that total
Buckets = Dict[int, List["PlayerRecord"]]
# A contested pairing before table numbers are assigned
PlayerPair = Tuple[PlayerId, PlayerId]
