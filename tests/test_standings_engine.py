import pytest

from draftpool.models import Contestant, PickSubmission, Season
from draftpool.scoring import (
    Standing,
    bonus_points,
    compute_standings,
    evaluate_bonuses,
    placement_points,
    rank_standings,
    select_swap,
    total_points,
)


def _season(count: int = 3, **scoring) -> Season:
    table = {"winnerBonus": 5, "runnerUpBonus": 2}
    table.update(scoring)
    return Season(
        id="s1",
        contestant_count=count,
        picks_per_player=1,
        alternate_slots=1,
        scoring=table,
    )


def _trio() -> list[Contestant]:
    return [
        Contestant(name="A", placement=1),
        Contestant(name="B", placement=2),
        Contestant(name="C", placement=3),
    ]


def _active_total(standing: Standing) -> float:
    picks = sum(pick.total for pick in standing.picks if not pick.swapped_out)
    alts = sum(alt.total for alt in standing.alternates if alt.swapped_in)
    return picks + alts + standing.winner_bonus_awarded + standing.runner_up_bonus_awarded


def test_placement_scale():
    season = _season(count=18)
    assert placement_points(Contestant(name="W", placement=1), season) == 18
    assert placement_points(Contestant(name="F", placement=18), season) == 1
    assert placement_points(Contestant(name="M", placement=7), season) == 12
    assert placement_points(Contestant(name="Active"), season) == 0
    assert placement_points(None, season) == 0


def test_bonus_points_ignore_unknown_keys():
    season = _season(immunityWin=2, idolFound=1)
    contestant = Contestant(
        name="X",
        placement=3,
        bonuses={"immunityWin": 3, "idolFound": 1, "fireMaking": 4},
    )
    assert bonus_points(contestant, season) == 7
    assert total_points(contestant, season) == 8
    assert bonus_points(Contestant(name="Y"), season) == 0
    assert bonus_points(None, season) == 0


def test_scenario_swap_to_winner():
    standings = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="p", picks=["C"], alternates=["A"])],
    )
    standing = standings[0]
    assert [p.placement_points for p in standing.picks] == [1]
    assert standing.picks[0].swapped_out is True
    assert standing.alternates[0].swapped_in is True
    assert standing.winner_bonus_awarded == 5
    assert standing.runner_up_bonus_awarded == 0
    assert standing.total == 8


def test_scenario_worse_alternate_not_used():
    standing = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="p", picks=["A"], alternates=["C"])],
    )[0]
    assert standing.picks[0].swapped_out is False
    assert standing.alternates[0].swapped_in is False
    assert standing.winner_bonus_awarded == 5
    assert standing.total == 8


def test_unknown_pick_scores_zero_and_is_never_swapped():
    standing = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="p", picks=["Nobody"], alternates=["B"])],
    )[0]
    pick = standing.picks[0]
    assert pick.contestant is None
    assert pick.contestant_name == "Nobody"
    assert pick.total == 0
    assert pick.swapped_out is False
    assert standing.alternates[0].swapped_in is False
    assert standing.total == 0


def test_no_alternates_means_no_swap():
    standing = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="p", picks=["C", "B"])],
    )[0]
    assert all(pick.swapped_out is False for pick in standing.picks)
    assert standing.alternates == ()
    assert standing.total == 1 + 2 + 2


def test_active_picks_are_not_swap_targets():
    season = _season(count=5)
    roster = [
        Contestant(name="Still In"),
        Contestant(name="Out", placement=4),
    ]
    assert select_swap([roster[0]], [roster[1]], season) is None


def test_equal_alternate_does_not_swap():
    season = _season(count=5)
    pick = Contestant(name="P", placement=4)
    alt = Contestant(name="Q", placement=4)
    assert select_swap([pick], [alt], season) is None


def test_swap_target_tie_prefers_first_pick():
    season = _season(count=6)
    first = Contestant(name="First", placement=5)
    second = Contestant(name="Second", placement=5)
    alt = Contestant(name="Alt", placement=2)
    decision = select_swap([second, first], [alt], season)
    assert decision is not None
    assert decision.pick_index == 0
    assert decision.alternate_index == 0


def test_swap_target_uses_placement_but_compares_totals():
    season = _season(count=6, immunityWin=10)
    # Earliest out by placement, but carries a large bonus tally.
    target = Contestant(name="Target", placement=6, bonuses={"immunityWin": 1})
    later = Contestant(name="Later", placement=3)
    alt_small = Contestant(name="Small", placement=2)
    alt_big = Contestant(name="Big", placement=2, bonuses={"immunityWin": 1})
    decision = select_swap([later, target], [alt_small, alt_big], season)
    assert decision is not None
    assert decision.pick_index == 1
    assert decision.alternate_index == 1


def test_first_qualifying_alternate_wins():
    season = _season(count=10)
    pick = Contestant(name="P", placement=10)
    alternates = [
        Contestant(name="Same", placement=10),
        Contestant(name="Better", placement=6),
        Contestant(name="Best", placement=1),
    ]
    decision = select_swap([pick], alternates, season)
    assert decision is not None
    assert decision.alternate_index == 1


def test_runner_up_bonus_from_swapped_in_alternate():
    standing = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="p", picks=["C"], alternates=["B"])],
    )[0]
    assert standing.runner_up_bonus_awarded == 2
    assert standing.total == 2 + 2


def test_winner_pick_kept_when_alternate_is_worse():
    season = _season(count=4)
    roster = [
        Contestant(name="W", placement=1),
        Contestant(name="R", placement=2),
    ]
    standing = compute_standings(
        season,
        roster,
        [PickSubmission(name="p", picks=["W"], alternates=["R"])],
    )[0]
    assert standing.winner_bonus_awarded == 5
    assert standing.runner_up_bonus_awarded == 0
    assert standing.total == 4 + 5


def test_swapped_out_runner_up_earns_no_bonus():
    season = _season(immunityWin=2)
    roster = _trio() + [Contestant(name="D", bonuses={"immunityWin": 2})]
    standing = compute_standings(
        season,
        roster,
        [PickSubmission(name="p", picks=["A", "B"], alternates=["D"])],
    )[0]
    assert standing.picks[1].swapped_out is True
    assert standing.alternates[0].swapped_in is True
    assert standing.winner_bonus_awarded == 5
    assert standing.runner_up_bonus_awarded == 0
    assert standing.total == 3 + 4 + 5
    assert [c.name for c in standing.active_contestants()] == ["A", "D"]


def test_evaluate_bonuses_awards_once_and_requires_config():
    season = _season()
    trio = _trio()
    assert evaluate_bonuses([trio[0], trio[0], trio[1], None], season) == (5, 2)
    bare = Season(contestant_count=3, picks_per_player=1, scoring={})
    assert evaluate_bonuses(trio, bare) == (0, 0)


def test_stable_ranking_keeps_submission_order():
    submissions = [
        PickSubmission(name="first", picks=["C"]),
        PickSubmission(name="top", picks=["A"]),
        PickSubmission(name="second", picks=["C"]),
        PickSubmission(name="empty", picks=[]),
        PickSubmission(name="third", picks=["C"]),
    ]
    standings = compute_standings(_season(), _trio(), submissions)
    assert [s.name for s in standings] == ["top", "first", "second", "third", "empty"]


def test_rank_standings_does_not_mutate_input():
    standings = compute_standings(
        _season(),
        _trio(),
        [PickSubmission(name="low", picks=["C"]), PickSubmission(name="high", picks=["A"])],
    )
    original = list(reversed(standings))
    ranked = rank_standings(original)
    assert [s.name for s in ranked] == ["high", "low"]
    assert [s.name for s in original] == ["low", "high"]


def test_every_submission_appears_and_totals_decompose():
    season = _season(count=6, immunityWin=2)
    roster = [
        Contestant(name="A", placement=1, bonuses={"immunityWin": 2}),
        Contestant(name="B", placement=2),
        Contestant(name="C", placement=6),
        Contestant(name="D", placement=5, bonuses={"immunityWin": 1}),
        Contestant(name="E"),
        Contestant(name="F"),
    ]
    submissions = [
        PickSubmission(name="one", picks=["C", "E"], alternates=["D", "A"]),
        PickSubmission(name="two", picks=["B", "F"], alternates=["C"]),
        PickSubmission(name="dup", picks=["C", "E"], alternates=["D", "A"]),
        PickSubmission(name="ghost", picks=["Z"], alternates=["Y"]),
    ]
    standings = compute_standings(season, roster, submissions)
    assert sorted(s.name for s in standings) == ["dup", "ghost", "one", "two"]
    for standing in standings:
        assert standing.total == _active_total(standing)
        assert sum(p.swapped_out for p in standing.picks) <= 1
        assert sum(a.swapped_in for a in standing.alternates) <= 1

    one = next(s for s in standings if s.name == "one")
    # C (1 pt) is replaced by D (2 + 2 bonus), the first alternate that beats it.
    assert one.picks[0].swapped_out is True
    assert one.alternates[0].swapped_in is True
    assert one.alternates[1].swapped_in is False
    assert one.total == 4


def test_submission_lengths_are_scored_as_given():
    season = _season()
    standing = compute_standings(
        season,
        _trio(),
        [PickSubmission(name="p", picks=["A", "B", "C"], alternates=["C", "B"])],
    )[0]
    assert len(standing.picks) == 3
    assert len(standing.alternates) == 2
    # C is the swap target; B is the first alternate that beats it.
    assert standing.picks[2].swapped_out is True
    assert standing.alternates[1].swapped_in is True
    assert standing.total == 3 + 2 + 2 + 5 + 2


@pytest.mark.parametrize("placement,expected", [(1, 3), (2, 2), (3, 1), (None, 0)])
def test_total_points_for_roster(placement, expected):
    season = _season()
    contestant = Contestant(name="X", placement=placement)
    assert total_points(contestant, season) == expected
