"""Named scoring presets that seasons can reference instead of a full table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Union

from draftpool.models import RUNNER_UP_BONUS_KEY, WINNER_BONUS_KEY


Number = Union[int, float]


@dataclass(frozen=True)
class ScoringPreset:
    key: str
    winner_bonus: Number
    runner_up_bonus: Number
    event_points: Mapping[str, Number]

    def as_scoring(self) -> Dict[str, Number]:
        scoring: Dict[str, Number] = dict(self.event_points)
        scoring[WINNER_BONUS_KEY] = self.winner_bonus
        scoring[RUNNER_UP_BONUS_KEY] = self.runner_up_bonus
        return scoring


_PRESETS: Dict[str, ScoringPreset] = {
    "PLACEMENT": ScoringPreset(
        key="PLACEMENT",
        winner_bonus=10,
        runner_up_bonus=5,
        event_points={},
    ),
    "CLASSIC": ScoringPreset(
        key="CLASSIC",
        winner_bonus=10,
        runner_up_bonus=5,
        event_points={
            "immunityWin": 2,
            "idolFound": 1,
            "idolPlayed": 1,
        },
    ),
    "GAMEPLAY": ScoringPreset(
        key="GAMEPLAY",
        winner_bonus=8,
        runner_up_bonus=4,
        event_points={
            "immunityWin": 3,
            "rewardWin": 1,
            "idolFound": 2,
            "idolPlayed": 2,
            "advantageFound": 1,
        },
    ),
}


def iter_presets() -> Iterable[ScoringPreset]:
    """Return an iterator of all configured presets."""

    return _PRESETS.values()


def get_preset(key: str) -> ScoringPreset:
    """Fetch a preset by name, raising KeyError if missing."""

    normalized = key.strip().upper()
    if normalized not in _PRESETS:
        raise KeyError(f"No scoring preset named {key!r}")
    return _PRESETS[normalized]


def preset_scoring(key: str) -> Dict[str, Number]:
    return get_preset(key).as_scoring()
