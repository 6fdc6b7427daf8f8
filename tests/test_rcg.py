import json

from bracketeer.models import EliminationRule, ScoringMode
from bracketeer.testing.rcg import (
    RandomCompetitionGenerator,
    RCGConfig,
    ResultPattern,
    StrengthDistribution,
    create_placement_competition,
    create_small_competition,
)


def _seated_once(round_data):
    seated = [p.id for match in round_data.matches for p in match.participants]
    return len(seated) == len(set(seated))


def test_small_competition_plays_suggested_rounds():
    data = create_small_competition(8, seed=42).generate_complete_competition()
    competition = data["competition"]

    assert competition.round_count == 3
    assert competition.outstanding_result_count == 0
    assert all(_seated_once(round_data) for round_data in competition.rounds)
    assert [entry.rank for entry in data["standings"]] == list(range(1, 9))
    assert set(data["strengths"]) == {p.id for p in data["participants"]}


def test_same_seed_reproduces_competition():
    first = create_small_competition(10, seed=7)
    second = create_small_competition(10, seed=7)

    first_json = first.export_json_format(first.generate_complete_competition())
    second_json = second.export_json_format(second.generate_complete_competition())

    assert first_json == second_json


def test_playoff_bracket_narrows_to_a_final():
    config = RCGConfig(
        num_participants=24,
        seed=3,
        draw_percentage=0,
        playoff_cut=8,
    )

    data = RandomCompetitionGenerator(config).generate_complete_competition()
    competition = data["competition"]
    playoff = competition.playoff_segment

    assert competition.regulation_segment.round_count == 5
    assert playoff.seeded
    assert len(playoff.participants) == 8
    assert [r.match_count for r in playoff.rounds] == [4, 2, 1]
    assert len(playoff.active_participants) == 2


def test_placement_results_fit_their_groups():
    data = create_placement_competition(16, seed=5).generate_complete_competition()
    competition = data["competition"]

    for round_data in competition.rounds:
        assert round_data.scoring_mode is ScoringMode.PLACEMENT_GROUP
        assert round_data.elimination_rule is EliminationRule.DOUBLE
        for match in round_data.matches:
            assert sorted(match.results) == list(range(1, match.participant_count + 1))

    segment = competition.regulation_segment
    for participant in segment.participants:
        if not segment.is_active(participant):
            assert competition.loss_count(participant) >= 2


def test_withdrawals_leave_a_field():
    config = RCGConfig(
        num_participants=12,
        seed=1,
        withdrawal_percentage=50,
        strength_distribution=StrengthDistribution.UNIFORM,
        result_pattern=ResultPattern.RANDOM,
    )

    data = RandomCompetitionGenerator(config).generate_complete_competition()
    competition = data["competition"]

    assert 2 <= len(competition.active_participants) < 12
    assert competition.outstanding_result_count == 0


def test_export_json_format():
    generator = create_small_competition(6, seed=11)
    data = generator.generate_complete_competition()

    exported = json.loads(generator.export_json_format(data))

    assert exported["competition_config"]["seed"] == 11
    assert len(exported["participants"]) == 6
    assert len(exported["rounds"]) == data["competition"].round_count
    assert [row["rank"] for row in exported["standings"]] == list(range(1, 7))
    for round_data in exported["rounds"]:
        for match in round_data["matches"]:
            assert match["results"]
