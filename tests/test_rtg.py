import pytest

from dunetournament.models.tournament import TournamentState
from dunetournament.testing.__main__ import main
from dunetournament.testing.rtg import RandomTournamentGenerator, ResultPattern, RTGConfig
from dunetournament.tournament.final_standings import final_standings


def test_complete_top_16_tournament():
    config = RTGConfig(num_players=24, num_rounds=4, top_cut=16, seed=7)
    state = RandomTournamentGenerator(config).generate_complete_tournament()

    assert state.phase == "finished"
    assert [r.type for r in state.rounds] == ["qualifying"] * 4 + [
        "semifinal",
        "winners-final",
        "grand-final",
    ]
    assert all(r.is_complete for r in state.rounds)

    for round_ in state.qualifying_rounds:
        seated = round_.player_ids
        assert sorted(seated) == sorted(p.id for p in state.players)

    ranking = final_standings(state)
    assert len({p.id for p in ranking}) == 24
    grand_final = state.rounds[-1].tables[0]
    assert ranking[0].id == grand_final.player_at(1)


def test_same_seed_same_tournament():
    config = RTGConfig(num_players=13, num_rounds=3, top_cut=8, seed=21)
    first = RandomTournamentGenerator(config).generate_complete_tournament()
    second = RandomTournamentGenerator(config).generate_complete_tournament()
    assert first.players == second.players
    assert first.rounds == second.rounds


def test_qualifying_points_add_up():
    config = RTGConfig(
        num_players=11,
        num_rounds=3,
        top_cut=8,
        play_top_cut=False,
        result_pattern=ResultPattern.SKILLED,
        seed=3,
    )
    state = RandomTournamentGenerator(config).generate_complete_tournament()
    assert state.phase == "qualifying"
    # tables of 4 award 11 points, tables of 3 award 10: 11 + 11 + 10 per round
    assert sum(p.points for p in state.players) == 3 * 32
    assert sum(p.efficiency for p in state.players) == 3 * (10 + 10 + 6)


def test_config_is_checked():
    with pytest.raises(ValueError):
        RandomTournamentGenerator(RTGConfig(num_players=10, top_cut=16)).generate_complete_tournament()
    with pytest.raises(ValueError):
        RandomTournamentGenerator(RTGConfig(num_players=10, num_rounds=0)).generate_complete_tournament()


def test_cli(tmp_path, capsys):
    output = tmp_path / "tournament.json"
    assert main(
        ["generate", "--players", "9", "--rounds", "2", "--top-cut", "8", "--seed", "5", "--output", str(output)]
    ) == 0
    state = TournamentState.from_json(output.read_text(encoding="utf-8"))
    assert state.phase == "finished"

    assert main(["standings", "--file", str(output), "--show", "3"]) == 0
    assert main(["leaders", "--file", str(output)]) == 0
    assert "Leader statistics" in capsys.readouterr().out

    assert main(["standings", "--file", str(tmp_path / "missing.json")]) == 1
    assert main([]) == 1
