from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from draftpool.scoring import ScoredAlternate, ScoredPick, Standing


Number = Union[int, float]

_CAMEL = ConfigDict(populate_by_name=True)


class ScoredPickResponse(BaseModel):
    contestant_name: str = Field(..., alias="contestantName")
    placement: Optional[int] = None
    placement_points: int = Field(..., alias="placementPoints")
    bonus_points: Number = Field(..., alias="bonusPoints")
    total: Number
    swapped_out: bool = Field(False, alias="swappedOut")

    model_config = _CAMEL

    @classmethod
    def from_scored(cls, pick: ScoredPick) -> "ScoredPickResponse":
        return cls(
            contestant_name=pick.contestant_name,
            placement=pick.contestant.placement if pick.contestant else None,
            placement_points=pick.placement_points,
            bonus_points=pick.bonus_points,
            total=pick.total,
            swapped_out=pick.swapped_out,
        )


class ScoredAlternateResponse(BaseModel):
    contestant_name: str = Field(..., alias="contestantName")
    placement: Optional[int] = None
    placement_points: int = Field(..., alias="placementPoints")
    bonus_points: Number = Field(..., alias="bonusPoints")
    total: Number
    swapped_in: bool = Field(False, alias="swappedIn")

    model_config = _CAMEL

    @classmethod
    def from_scored(cls, alternate: ScoredAlternate) -> "ScoredAlternateResponse":
        return cls(
            contestant_name=alternate.contestant_name,
            placement=alternate.contestant.placement if alternate.contestant else None,
            placement_points=alternate.placement_points,
            bonus_points=alternate.bonus_points,
            total=alternate.total,
            swapped_in=alternate.swapped_in,
        )


class StandingResponse(BaseModel):
    rank: int
    name: str
    total: Number
    picks: List[ScoredPickResponse]
    alternates: List[ScoredAlternateResponse]
    winner_bonus_awarded: Number = Field(..., alias="winnerBonusAwarded")
    runner_up_bonus_awarded: Number = Field(..., alias="runnerUpBonusAwarded")

    model_config = _CAMEL

    @classmethod
    def from_standing(cls, standing: Standing, rank: int) -> "StandingResponse":
        return cls(
            rank=rank,
            name=standing.name,
            total=standing.total,
            picks=[ScoredPickResponse.from_scored(pick) for pick in standing.picks],
            alternates=[ScoredAlternateResponse.from_scored(alt) for alt in standing.alternates],
            winner_bonus_awarded=standing.winner_bonus_awarded,
            runner_up_bonus_awarded=standing.runner_up_bonus_awarded,
        )


class SeasonProgressResponse(BaseModel):
    eliminated: int
    remaining: int


class StandingsResponse(BaseModel):
    season: str
    name: Optional[str] = None
    status: str
    submissions_open: bool = Field(False, alias="submissionsOpen")
    progress: SeasonProgressResponse
    standings: List[StandingResponse]

    model_config = _CAMEL
