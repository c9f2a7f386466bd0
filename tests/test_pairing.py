import logging
import random

import pytest

from swisspairing.exceptions import NoPairingAvailableException
from swisspairing.models import PlayerRecord, TournamentConfig
from swisspairing.pairing import SwissPairingEngine, find_best_opponent, generate_pairings


def _player(user_id, points=0, omw=0.0, opponents=(), received_bye=False):
    return PlayerRecord(
        user_id=user_id,
        user_name=f"Player {user_id}",
        points=points,
        omw_percent=omw,
        received_bye=received_bye,
        opponent_ids=list(opponents),
    )


def _pair_sets(result):
    return [frozenset(p.player_ids) for p in result.contested_pairings]


def _assert_valid_round(players, result):
    seen = []
    for pairing in result.pairings:
        seen.extend(pairing.player_ids)
    seen.extend(result.unpaired_player_ids)
    assert sorted(seen) == sorted(p.user_id for p in players)
    assert [p.table_number for p in result.pairings] == list(
        range(1, len(result.pairings) + 1)
    )
    for pairing in result.contested_pairings:
        assert pairing.player_a_id != pairing.player_b_id


def test_no_players_gives_empty_result():
    result = generate_pairings([])
    assert result.pairings == []
    assert result.bye_player_id is None
    assert result.unpaired_player_ids == []


def test_single_player_gets_bye():
    result = generate_pairings([_player("p1")])
    assert len(result.pairings) == 1
    assert result.pairings[0].table_number == 1
    assert result.pairings[0].is_bye
    assert result.bye_player_id == "p1"


def test_two_players_are_paired():
    result = generate_pairings([_player("p1"), _player("p2")])
    assert _pair_sets(result) == [frozenset({"p1", "p2"})]
    assert result.pairings[0].table_number == 1
    assert result.bye_player_id is None


def test_bye_goes_to_lowest_points():
    players = [
        _player("p1", 3),
        _player("p2", 3),
        _player("p3", 3),
        _player("p4", 3),
        _player("p5", 0),
    ]
    result = generate_pairings(players, rng=random.Random(1))
    assert result.bye_player_id == "p5"
    assert result.pairings[-1].is_bye
    assert result.pairings[-1].player_a_id == "p5"


def test_bye_goes_to_lowest_omw_in_bucket():
    players = [
        _player("p1", omw=0.5),
        _player("p2", omw=0.6),
        _player("p3", omw=0.3),
        _player("p4", omw=0.4),
        _player("p5", omw=0.7),
    ]
    result = generate_pairings(players, rng=random.Random(7))
    assert result.bye_player_id == "p3"


def test_bye_omw_tie_broken_by_id():
    players = [_player("p3", omw=0.4), _player("p2", omw=0.40005), _player("p1", omw=0.5)]
    result = generate_pairings(players, rng=random.Random(3))
    assert result.bye_player_id == "p2"


def test_bye_skips_players_who_already_had_one():
    players = [
        _player("p1", 3),
        _player("p2", 0, received_bye=True),
        _player("p3", 0, received_bye=True),
    ]
    result = generate_pairings(players, rng=random.Random(5))
    assert result.bye_player_id == "p1"
    assert _pair_sets(result) == [frozenset({"p2", "p3"})]


def test_repeat_bye_when_everyone_has_had_one():
    players = [
        _player("p1", 3, omw=0.5, received_bye=True),
        _player("p2", 0, omw=0.5, received_bye=True),
        _player("p3", 0, omw=0.6, received_bye=True),
    ]
    result = generate_pairings(players, deterministic=True)
    # last player of the lowest bucket
    assert result.bye_player_id == "p2"


def test_select_bye_with_no_players_raises():
    engine = SwissPairingEngine(deterministic=True)
    with pytest.raises(NoPairingAvailableException, match="No player available for bye"):
        engine.select_bye_player({})


def test_players_paired_within_point_buckets():
    players = [_player("p1", 6), _player("p2", 6), _player("p3", 3), _player("p4", 3)]
    result = generate_pairings(players, rng=random.Random(11))
    assert result.pairings[0].table_number == 1
    assert frozenset(result.pairings[0].player_ids) == {"p1", "p2"}
    assert frozenset(result.pairings[1].player_ids) == {"p3", "p4"}


def test_buckets_ordered_by_omw_descending():
    engine = SwissPairingEngine(deterministic=True)
    buckets = engine.bucket_players(
        [
            _player("p1", 3, omw=0.2),
            _player("p2", 3, omw=0.8),
            _player("p3", 0, omw=0.5),
            _player("p4", 3, omw=0.5),
        ]
    )
    assert set(buckets) == {3, 0}
    assert [p.user_id for p in buckets[3]] == ["p2", "p4", "p1"]
    assert [p.user_id for p in buckets[0]] == ["p3"]


def test_pairs_follow_omw_order():
    players = [
        _player("p1", omw=0.2),
        _player("p2", omw=0.8),
        _player("p3", omw=0.5),
        _player("p4", omw=0.4),
    ]
    result = generate_pairings(players, deterministic=True)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p2", "p3"),
        ("p4", "p1"),
    ]


def test_deterministic_mode_orders_ties_by_id():
    players = [_player(pid) for pid in ("p4", "p3", "p2", "p1")]
    result = generate_pairings(players, deterministic=True)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p1", "p2"),
        ("p3", "p4"),
    ]


def test_avoids_rematches():
    players = [
        _player("p1", opponents=["p2"]),
        _player("p2", opponents=["p1"]),
        _player("p3"),
        _player("p4"),
    ]
    result = generate_pairings(players, avoid_rematches=True, deterministic=True)
    assert frozenset({"p1", "p2"}) not in _pair_sets(result)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p1", "p3"),
        ("p2", "p4"),
    ]


def test_allows_rematches_when_disabled():
    players = [
        _player("p1", opponents=["p2"]),
        _player("p2", opponents=["p1"]),
        _player("p3"),
        _player("p4"),
    ]
    result = generate_pairings(players, avoid_rematches=False, deterministic=True)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p1", "p2"),
        ("p3", "p4"),
    ]


def test_rematch_allowed_when_unavoidable():
    players = [_player("p1", opponents=["p2"]), _player("p2", opponents=["p1"])]
    result = generate_pairings(players, avoid_rematches=True, rng=random.Random(2))
    assert _pair_sets(result) == [frozenset({"p1", "p2"})]


def test_find_best_opponent():
    player = _player("p1", opponents=["p2", "p3"])
    candidates = [_player("p2"), _player("p3"), _player("p4")]
    assert find_best_opponent(player, candidates, True).user_id == "p4"
    assert find_best_opponent(player, candidates, False).user_id == "p2"
    assert find_best_opponent(player, candidates[:2], True).user_id == "p2"
    assert find_best_opponent(player, [], True) is None


def test_odd_player_floats_to_next_bucket():
    players = [_player("p1", 6), _player("p2", 3), _player("p3", 3), _player("p4", 3)]
    result = generate_pairings(players, deterministic=True)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p1", "p2"),
        ("p3", "p4"),
    ]
    assert result.unpaired_player_ids == []


def test_floater_without_lower_bucket_is_reported(caplog):
    engine = SwissPairingEngine(deterministic=True)
    buckets = {6: [_player("a", 6)], 3: [_player("b", 3)], 0: [_player("c", 0)]}
    with caplog.at_level(logging.WARNING, logger="swisspairing.pairing.swiss"):
        pairs, unpaired = engine._pair_by_buckets(buckets, True)
    assert pairs == [("a", "b")]
    assert unpaired == ["c"]
    assert "left unpaired" in caplog.text


def test_five_players_sequential_tables_with_bye_last():
    players = [_player(f"p{i}") for i in range(1, 6)]
    result = generate_pairings(players, rng=random.Random(9))
    assert [p.table_number for p in result.pairings] == [1, 2, 3]
    assert not result.pairings[0].is_bye
    assert not result.pairings[1].is_bye
    assert result.pairings[2].is_bye
    assert result.pairings[2].player_a_id == result.bye_player_id


@pytest.mark.parametrize("count", [32, 31])
def test_large_fields(count):
    rng = random.Random(count)
    players = [_player(f"p{i}", points=rng.choice([0, 3, 6, 9])) for i in range(count)]
    result = generate_pairings(players, rng=random.Random(100))
    _assert_valid_round(players, result)
    assert result.unpaired_player_ids == []
    if count % 2:
        assert len(result.pairings) == count // 2 + 1
        assert result.bye_player_id is not None
    else:
        assert len(result.pairings) == count // 2
        assert result.bye_player_id is None


def test_same_seed_gives_same_pairings():
    players = [_player(f"p{i}", points=(i % 3) * 3) for i in range(13)]
    first = generate_pairings(players, rng=random.Random(42))
    second = generate_pairings(players, rng=random.Random(42))
    assert first.to_dict() == second.to_dict()


def test_input_records_are_not_mutated():
    players = [_player(f"p{i}", opponents=["x"]) for i in range(5)]
    before = [p.to_dict() for p in players]
    generate_pairings(players, rng=random.Random(4))
    assert [p.to_dict() for p in players] == before
    assert [p.user_id for p in players] == [f"p{i}" for i in range(5)]


def test_random_fields_are_always_fully_paired():
    rng = random.Random(2025)
    for _ in range(50):
        count = rng.randint(2, 40)
        ids = [f"p{i}" for i in range(count)]
        players = [
            _player(
                pid,
                points=rng.choice([0, 1, 3, 4, 6]),
                omw=rng.random(),
                opponents=rng.sample(ids, rng.randint(0, min(3, count - 1))),
                received_bye=rng.random() < 0.3,
            )
            for pid in ids
        ]
        result = generate_pairings(
            players,
            avoid_rematches=rng.random() < 0.5,
            rng=random.Random(rng.randint(0, 10**6)),
        )
        _assert_valid_round(players, result)
        assert result.unpaired_player_ids == []
        assert (result.bye_player_id is not None) == (count % 2 == 1)


def test_engine_from_config_orders_ties_by_id():
    engine = SwissPairingEngine.from_config(TournamentConfig(deterministic_pairing=True))
    players = [_player(pid) for pid in ("p4", "p3", "p2", "p1")]
    result = engine.generate_pairings(players)
    assert engine.deterministic is True
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("p1", "p2"),
        ("p3", "p4"),
    ]


def test_engine_from_seeded_config_is_reproducible():
    players = [_player(f"p{i}", points=(i % 2) * 3) for i in range(11)]
    config = TournamentConfig(seed=17)
    first = SwissPairingEngine.from_config(config).generate_pairings(players)
    second = SwissPairingEngine.from_config(config).generate_pairings(players)
    assert first.to_dict() == second.to_dict()


def test_id_ties_ignore_case():
    players = [_player(pid) for pid in ("d", "C", "b", "A")]
    result = generate_pairings(players, deterministic=True)
    assert [(p.player_a_id, p.player_b_id) for p in result.pairings] == [
        ("A", "b"),
        ("C", "d"),
    ]

    players = [_player("B", omw=0.4), _player("a", omw=0.4), _player("c", omw=0.9)]
    assert generate_pairings(players, deterministic=True).bye_player_id == "a"
