"""Input records for seasons, contestants and pick submissions."""

from .season import (
    RUNNER_UP_BONUS_KEY,
    WINNER_BONUS_KEY,
    Contestant,
    PickSubmission,
    Season,
    SeasonStatus,
    SeasonSummary,
)

__all__ = [
    "Contestant",
    "PickSubmission",
    "Season",
    "SeasonStatus",
    "SeasonSummary",
    "WINNER_BONUS_KEY",
    "RUNNER_UP_BONUS_KEY",
]
