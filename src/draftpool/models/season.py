"""Canonical season records shared by the loader, store, API and engine."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


WINNER_BONUS_KEY = "winnerBonus"
RUNNER_UP_BONUS_KEY = "runnerUpBonus"

SeasonStatus = Literal["upcoming", "active", "completed"]

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Season(BaseModel):
    """Configuration for one contest instance."""

    id: Optional[str] = None
    name: Optional[str] = None
    status: SeasonStatus = "active"
    contestant_count: int = Field(..., alias="contestantCount", gt=0)
    picks_per_player: int = Field(..., alias="picksPerPlayer", ge=1)
    alternate_slots: int = Field(default=0, alias="alternates", ge=0)
    scoring: Dict[str, Union[int, float]] = Field(default_factory=dict)
    submission_deadline: Optional[datetime] = Field(default=None, alias="submissionDeadline")

    model_config = _RECORD_CONFIG

    @property
    def winner_bonus(self) -> Union[int, float]:
        return self.scoring.get(WINNER_BONUS_KEY) or 0

    @property
    def runner_up_bonus(self) -> Union[int, float]:
        return self.scoring.get(RUNNER_UP_BONUS_KEY) or 0

    def accepting_submissions(self, now: Optional[datetime] = None) -> bool:
        """Active seasons take picks until their deadline; no deadline means closed."""

        if self.status != "active" or self.submission_deadline is None:
            return False
        deadline = self.submission_deadline
        if deadline.tzinfo is None:
            deadline = deadline.replace(tzinfo=timezone.utc)
        return (now or datetime.now(timezone.utc)) < deadline


class Contestant(BaseModel):
    """One roster member. ``placement`` stays ``None`` until eliminated."""

    name: str = Field(..., min_length=1)
    placement: Optional[int] = Field(default=None, ge=1)
    bonuses: Dict[str, int] = Field(default_factory=dict)
    tribe: Optional[str] = None
    jury: bool = False
    method: Optional[str] = None
    note: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None

    model_config = _RECORD_CONFIG

    @property
    def eliminated(self) -> bool:
        return self.placement is not None


class PickSubmission(BaseModel):
    """A player's ordered picks and alternates for one season."""

    name: str
    picks: List[str]
    alternates: List[str] = Field(default_factory=list)
    submitted_at: Optional[datetime] = Field(default=None, alias="submittedAt")

    model_config = _RECORD_CONFIG


class SeasonSummary(BaseModel):
    id: str
    name: str
    status: SeasonStatus = "active"

    model_config = _RECORD_CONFIG
