"""Standings engine: placement/bonus points, alternate swap, ranking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from draftpool.models import Contestant, PickSubmission, Season


logger = logging.getLogger(__name__)

Points = Union[int, float]


@dataclass(frozen=True)
class ScoredPick:
    """One drafted pick with its point breakdown."""

    contestant_name: str
    contestant: Optional[Contestant]
    placement_points: int
    bonus_points: Points
    total: Points
    swapped_out: bool = False


@dataclass(frozen=True)
class ScoredAlternate:
    """One alternate with its point breakdown."""

    contestant_name: str
    contestant: Optional[Contestant]
    placement_points: int
    bonus_points: Points
    total: Points
    swapped_in: bool = False


@dataclass(frozen=True)
class SwapDecision:
    pick_index: int
    alternate_index: int


@dataclass(frozen=True)
class Standing:
    """Fully itemized score for one player."""

    name: str
    picks: Tuple[ScoredPick, ...]
    alternates: Tuple[ScoredAlternate, ...]
    winner_bonus_awarded: Points
    runner_up_bonus_awarded: Points
    total: Points

    def active_contestants(self) -> list[Optional[Contestant]]:
        """Picks minus the swapped-out one, plus the swapped-in alternate."""

        return _active_roster(self.picks, self.alternates)


def _active_roster(
    picks: Iterable[ScoredPick],
    alternates: Iterable[ScoredAlternate],
) -> list[Optional[Contestant]]:
    active = [pick.contestant for pick in picks if not pick.swapped_out]
    active.extend(alt.contestant for alt in alternates if alt.swapped_in)
    return active


def placement_points(contestant: Optional[Contestant], season: Season) -> int:
    if contestant is None or contestant.placement is None:
        return 0
    return season.contestant_count + 1 - contestant.placement


def bonus_points(contestant: Optional[Contestant], season: Season) -> Points:
    if contestant is None or not contestant.bonuses:
        return 0
    total: Points = 0
    for key, count in contestant.bonuses.items():
        # Keys missing from the scoring table are skipped.
        if key in season.scoring:
            total += count * season.scoring[key]
    return total


def total_points(contestant: Optional[Contestant], season: Season) -> Points:
    return placement_points(contestant, season) + bonus_points(contestant, season)


def select_swap(
    picks: Sequence[Optional[Contestant]],
    alternates: Sequence[Optional[Contestant]],
    season: Season,
) -> Optional[SwapDecision]:
    """Pick the alternate that replaces the earliest-eliminated pick, if any.

    Only eliminated picks are swap targets. Among them the lowest placement
    score loses, with the earliest pick winning ties. The first alternate whose
    total strictly beats the target's total is swapped in.
    """

    if not alternates:
        return None

    target_index: Optional[int] = None
    target_points = 0
    for index, contestant in enumerate(picks):
        if contestant is None or contestant.placement is None:
            continue
        points = placement_points(contestant, season)
        if target_index is None or points < target_points:
            target_index = index
            target_points = points

    if target_index is None:
        return None

    target_total = total_points(picks[target_index], season)
    for alt_index, alternate in enumerate(alternates):
        if total_points(alternate, season) > target_total:
            return SwapDecision(pick_index=target_index, alternate_index=alt_index)
    return None


def evaluate_bonuses(
    active: Iterable[Optional[Contestant]],
    season: Season,
) -> Tuple[Points, Points]:
    """Return the (winner, runner-up) bonuses earned by an active roster."""

    winner_bonus: Points = 0
    runner_up_bonus: Points = 0
    for contestant in active:
        if contestant is None:
            continue
        if contestant.placement == 1 and season.winner_bonus:
            winner_bonus = season.winner_bonus
        if contestant.placement == 2 and season.runner_up_bonus:
            runner_up_bonus = season.runner_up_bonus
    return winner_bonus, runner_up_bonus


def index_contestants(contestants: Iterable[Contestant]) -> dict[str, Contestant]:
    return {contestant.name: contestant for contestant in contestants}


def score_submission(
    submission: PickSubmission,
    roster: Mapping[str, Contestant],
    season: Season,
) -> Standing:
    pick_contestants = [roster.get(name) for name in submission.picks]
    alt_contestants = [roster.get(name) for name in submission.alternates]

    swap = select_swap(pick_contestants, alt_contestants, season)
    swap_pick = swap.pick_index if swap else -1
    swap_alt = swap.alternate_index if swap else -1
    if swap is not None:
        logger.debug(
            "Swapping %s -> %s for %s",
            submission.picks[swap.pick_index],
            submission.alternates[swap.alternate_index],
            submission.name,
        )

    scored_picks = tuple(
        ScoredPick(
            contestant_name=name,
            contestant=contestant,
            placement_points=placement_points(contestant, season),
            bonus_points=bonus_points(contestant, season),
            total=total_points(contestant, season),
            swapped_out=index == swap_pick,
        )
        for index, (name, contestant) in enumerate(zip(submission.picks, pick_contestants))
    )
    scored_alternates = tuple(
        ScoredAlternate(
            contestant_name=name,
            contestant=contestant,
            placement_points=placement_points(contestant, season),
            bonus_points=bonus_points(contestant, season),
            total=total_points(contestant, season),
            swapped_in=index == swap_alt,
        )
        for index, (name, contestant) in enumerate(zip(submission.alternates, alt_contestants))
    )

    total: Points = 0
    for pick in scored_picks:
        if not pick.swapped_out:
            total += pick.total
    for alternate in scored_alternates:
        if alternate.swapped_in:
            total += alternate.total

    winner_bonus, runner_up_bonus = evaluate_bonuses(
        _active_roster(scored_picks, scored_alternates),
        season,
    )
    total += winner_bonus + runner_up_bonus

    return Standing(
        name=submission.name,
        picks=scored_picks,
        alternates=scored_alternates,
        winner_bonus_awarded=winner_bonus,
        runner_up_bonus_awarded=runner_up_bonus,
        total=total,
    )


def rank_standings(standings: Sequence[Standing]) -> list[Standing]:
    """Order by total descending; equal totals keep submission order."""

    ordered = sorted(enumerate(standings), key=lambda item: (-item[1].total, item[0]))
    return [standing for _, standing in ordered]


def compute_standings(
    season: Season,
    contestants: Iterable[Contestant],
    submissions: Iterable[PickSubmission],
) -> list[Standing]:
    roster = index_contestants(contestants)
    standings = [score_submission(submission, roster, season) for submission in submissions]
    swaps = sum(1 for standing in standings if any(pick.swapped_out for pick in standing.picks))
    logger.debug(
        "Scored %d submissions against %d contestants (%d swaps) for season %s",
        len(standings),
        len(roster),
        swaps,
        season.id,
    )
    return rank_standings(standings)
