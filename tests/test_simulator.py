import argparse
import json

import pytest

from swisspairing.models import MatchResultType
from swisspairing.testing import ResultPattern, SimulationConfig, TournamentSimulator
from swisspairing.testing.__main__ import (
    COMMANDS,
    create_completer,
    create_main_parser,
    load_snapshot,
    run_pair_command,
    run_standings_command,
)
from swisspairing.testing.simulator import create_small_tournament
from swisspairing.tournament import calculate_standings


def _assert_rounds_well_formed(tournament):
    dropped = set()
    for round_data in tournament["rounds"]:
        seen = set()
        for pairing in round_data.pairings:
            for player_id in pairing.player_ids:
                assert player_id not in seen
                assert player_id not in dropped
                seen.add(player_id)
        assert [p.table_number for p in round_data.pairings] == list(
            range(1, len(round_data.pairings) + 1)
        )
        dropped.update(round_data.dropped_after)


@pytest.mark.parametrize("num_players", [2, 7, 16, 25])
def test_simulated_event_runs_to_completion(num_players):
    config = SimulationConfig(num_players=num_players, seed=num_players)
    tournament = TournamentSimulator(config).run()

    status = tournament["status"]
    assert status.is_complete is True
    assert status.can_start_next_round is False
    assert len(tournament["rounds"]) == status.recommended_rounds
    assert len(tournament["standings"]) == num_players
    _assert_rounds_well_formed(tournament)


def test_planned_rounds_respected():
    config = SimulationConfig(
        num_players=8, num_rounds=6, seed=5, result_pattern=ResultPattern.BALANCED
    )
    tournament = TournamentSimulator(config).run()
    assert 3 <= len(tournament["rounds"]) <= 6
    assert tournament["status"].is_complete is True


def test_every_player_paired_each_round_without_drops():
    config = SimulationConfig(num_players=20, num_rounds=5, seed=321)
    tournament = TournamentSimulator(config).run()
    for round_data in tournament["rounds"]:
        paired = [pid for p in round_data.pairings for pid in p.player_ids]
        assert sorted(paired) == sorted(f"p{i}" for i in range(1, 21))
        assert round_data.unpaired_player_ids == []


def test_dropped_players_are_not_paired_again():
    config = SimulationConfig(num_players=24, num_rounds=5, seed=11, drop_percentage=15)
    tournament = TournamentSimulator(config).run()
    _assert_rounds_well_formed(tournament)
    dropped = {pid for r in tournament["rounds"] for pid in r.dropped_after}
    for standing in tournament["standings"]:
        assert standing.is_dropped == (standing.user_id in dropped)


def test_everyone_dropping_ends_the_event():
    config = SimulationConfig(num_players=6, seed=1, drop_percentage=100)
    tournament = TournamentSimulator(config).run()
    assert len(tournament["rounds"]) == 1
    assert tournament["status"].reason == "All players dropped"


def test_points_match_the_played_rounds():
    config = SimulationConfig(num_players=9, seed=77, draw_percentage=0)
    tournament = TournamentSimulator(config).run()
    total_tables = sum(len(r.pairings) for r in tournament["rounds"])
    # without draws or double losses every table hands out one win
    assert sum(s.points for s in tournament["standings"]) == total_tables * 3


def test_seeded_simulation_is_reproducible():
    first = TournamentSimulator(SimulationConfig(num_players=12, seed=2024)).run()
    second = TournamentSimulator(SimulationConfig(num_players=12, seed=2024)).run()
    assert TournamentSimulator.export_json_format(
        first
    ) == TournamentSimulator.export_json_format(second)


def test_export_json_format():
    tournament = create_small_tournament(seed=3)
    payload = json.loads(TournamentSimulator.export_json_format(tournament))
    assert set(payload) == {"config", "players", "rounds", "standings", "status"}
    assert len(payload["players"]) == 8
    assert payload["status"]["is_complete"] is True
    assert [s["rank"] for s in payload["standings"]] == list(range(1, 9))


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps(
            {
                "players": [
                    {"user_id": "p1", "user_name": "Ann"},
                    {"user_id": "p2", "user_name": "Bo"},
                    {"user_id": "p3", "user_name": "Cy"},
                    {"user_id": "p4"},
                ],
                "matches": [
                    {
                        "player_a_id": "p1",
                        "player_b_id": "p2",
                        "result": "PLAYER_A_WIN",
                        "games_won_a": 2,
                        "games_won_b": 0,
                    },
                    {
                        "player_a_id": "p3",
                        "player_b_id": "p4",
                        "result": "DRAW",
                        "games_won_a": 1,
                        "games_won_b": 1,
                    },
                ],
                "dropped": ["p4"],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_load_snapshot(snapshot_file):
    snapshot = load_snapshot(str(snapshot_file))
    assert snapshot["player_ids"] == ["p1", "p2", "p3", "p4"]
    assert snapshot["player_names"]["p4"] == "p4"
    assert snapshot["dropped"] == {"p4"}
    assert len(snapshot["matches"]) == 2


def test_standings_command(snapshot_file, capsys):
    args = argparse.Namespace(file=str(snapshot_file))
    assert run_standings_command(args) == 0
    out = capsys.readouterr().out
    assert "Ann" in out
    assert "(dropped)" in out


def test_pair_command_skips_dropped_players(snapshot_file, capsys):
    args = create_main_parser().parse_args(
        ["pair", "--file", str(snapshot_file), "--seed", "1"]
    )
    assert run_pair_command(args) == 0
    out = capsys.readouterr().out
    assert "p4" not in out
    assert "BYE" in out
    assert "Table   2" in out


def test_completer_offers_plain_and_slash_commands():
    options = create_completer().options
    for command in COMMANDS:
        assert command in options
        assert f"/{command}" in options
    assert "/help" in options


def test_deterministic_config_reaches_the_engine():
    simulator = TournamentSimulator(
        SimulationConfig(num_players=8, seed=1, deterministic_pairing=True)
    )
    assert simulator.engine.deterministic is True
    first_round = simulator.run()["rounds"][0]
    # everyone starts level, so tables follow player id order
    assert [(p.player_a_id, p.player_b_id) for p in first_round.pairings] == [
        ("p1", "p2"),
        ("p3", "p4"),
        ("p5", "p6"),
        ("p7", "p8"),
    ]


def test_top_cut_players_draw_in_final_round():
    config = SimulationConfig(
        num_players=16,
        num_rounds=4,
        seed=9,
        draw_percentage=0,
        intentional_draws=True,
        top_cut_size=8,
    )
    tournament = TournamentSimulator(config).run()
    rounds = tournament["rounds"]
    assert len(rounds) == 4

    earlier = [m for r in rounds[:-1] for m in r.matches]
    assert all(m.result is not MatchResultType.INTENTIONAL_DRAW for m in earlier)

    ids = [p.user_id for p in tournament["players"]]
    ranks = {s.user_id: s.rank for s in calculate_standings(ids, {}, earlier)}
    drawn = 0
    for match in rounds[-1].matches:
        if match.is_bye:
            continue
        in_cut = ranks[match.player_a_id] <= 8 and ranks[match.player_b_id] <= 8
        assert (match.result is MatchResultType.INTENTIONAL_DRAW) == in_cut
        drawn += in_cut
    assert drawn > 0


def test_pair_command_deterministic(snapshot_file, capsys):
    args = create_main_parser().parse_args(
        ["pair", "--file", str(snapshot_file), "--deterministic"]
    )
    assert run_pair_command(args) == 0
    out = capsys.readouterr().out
    assert "p1 vs p3" in out
    assert "p2 vs BYE" in out
