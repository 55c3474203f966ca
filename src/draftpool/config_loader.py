"""Load season data from a data directory and memoise it per season."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from draftpool.config import preset_scoring
from draftpool.models import Contestant, PickSubmission, Season, SeasonSummary


logger = logging.getLogger(__name__)

SEASONS_FILE = "seasons.json"
SEASON_FILE = "season.json"
CONTESTANTS_FILE = "contestants.json"
PICKS_FILE = "picks.json"


class SeasonDataError(ValueError):
    """Raised when season files are missing or malformed."""


class SeasonNotFound(SeasonDataError):
    """Raised when no directory exists for the requested season."""


@dataclass(frozen=True)
class SeasonBundle:
    season: Season
    contestants: tuple[Contestant, ...]
    picks: tuple[PickSubmission, ...]


@dataclass(frozen=True)
class SeasonProgress:
    eliminated: int
    remaining: int


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SeasonDataError(f"missing data file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SeasonDataError(f"invalid JSON in {path}: {exc}") from exc


def _season_from_payload(payload: Any, season_id: str) -> Season:
    if not isinstance(payload, dict):
        raise SeasonDataError(f"{season_id}/{SEASON_FILE} must hold an object")
    data: Dict[str, Any] = dict(payload)
    data.setdefault("id", season_id)
    scoring = data.get("scoring")
    if isinstance(scoring, str):
        try:
            data["scoring"] = preset_scoring(scoring)
        except KeyError as exc:
            raise SeasonDataError(str(exc)) from exc
    try:
        return Season.model_validate(data)
    except ValidationError as exc:
        raise SeasonDataError(f"invalid season {season_id}: {exc}") from exc


def load_seasons(data_dir: Path) -> list[SeasonSummary]:
    payload = _read_json(Path(data_dir) / SEASONS_FILE)
    if not isinstance(payload, list):
        raise SeasonDataError(f"{SEASONS_FILE} must hold a list")
    try:
        return [SeasonSummary.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise SeasonDataError(f"invalid {SEASONS_FILE}: {exc}") from exc


def load_season_bundle(data_dir: Path, season_id: str) -> SeasonBundle:
    if not season_id or season_id in {".", ".."} or Path(season_id).name != season_id:
        raise SeasonNotFound(f"unknown season {season_id!r}")
    season_dir = Path(data_dir) / season_id
    if not season_dir.is_dir():
        raise SeasonNotFound(f"unknown season {season_id!r}")

    season = _season_from_payload(_read_json(season_dir / SEASON_FILE), season_id)
    contestants_payload = _read_json(season_dir / CONTESTANTS_FILE)
    picks_path = season_dir / PICKS_FILE
    picks_payload = _read_json(picks_path) if picks_path.exists() else []

    try:
        contestants = tuple(Contestant.model_validate(item) for item in contestants_payload)
        picks = tuple(PickSubmission.model_validate(item) for item in picks_payload)
    except (TypeError, ValidationError) as exc:
        raise SeasonDataError(f"invalid roster or picks for {season_id}: {exc}") from exc

    logger.info(
        "Loaded season %s: %d contestants, %d static submissions",
        season_id,
        len(contestants),
        len(picks),
    )
    return SeasonBundle(season=season, contestants=contestants, picks=picks)


class SeasonDataCache:
    """Per-season memo of loaded bundles.

    Entries stay until :meth:`invalidate` or :meth:`clear` is called; callers
    that store new submissions must invalidate the affected season.
    """

    def __init__(self, data_dir: Path, *, enabled: bool = True):
        self.data_dir = Path(data_dir)
        self.enabled = enabled
        self._bundles: Dict[str, SeasonBundle] = {}
        self._seasons: Optional[list[SeasonSummary]] = None

    def seasons(self) -> list[SeasonSummary]:
        if self._seasons is None or not self.enabled:
            self._seasons = load_seasons(self.data_dir)
        return self._seasons

    def get(self, season_id: str) -> SeasonBundle:
        if not self.enabled:
            return load_season_bundle(self.data_dir, season_id)
        bundle = self._bundles.get(season_id)
        if bundle is None:
            bundle = load_season_bundle(self.data_dir, season_id)
            self._bundles[season_id] = bundle
        return bundle

    def invalidate(self, season_id: str) -> bool:
        """Drop one season's entry. Returns True when something was cached."""

        removed = self._bundles.pop(season_id, None) is not None
        if removed:
            logger.debug("Invalidated cached season %s", season_id)
        return removed

    def clear(self) -> None:
        self._bundles.clear()
        self._seasons = None

    def __contains__(self, season_id: object) -> bool:
        return season_id in self._bundles


def merge_submissions(
    static: Iterable[PickSubmission],
    live: Iterable[PickSubmission],
) -> list[PickSubmission]:
    """Live submissions replace static ones with the same player name."""

    merged: Dict[str, PickSubmission] = {}
    for submission in static:
        merged[submission.name] = submission
    for submission in live:
        merged[submission.name] = submission
    return list(merged.values())


def featured_season(seasons: Sequence[SeasonSummary]) -> Optional[SeasonSummary]:
    """The active season, falling back to the latest completed one."""

    for summary in seasons:
        if summary.status == "active":
            return summary
    completed = [summary for summary in seasons if summary.status == "completed"]
    return completed[-1] if completed else None


def season_progress(season: Season, contestants: Iterable[Contestant]) -> SeasonProgress:
    eliminated = sum(1 for contestant in contestants if contestant.eliminated)
    return SeasonProgress(eliminated=eliminated, remaining=season.contestant_count - eliminated)


def elimination_order(contestants: Iterable[Contestant]) -> List[Contestant]:
    """Eliminated contestants, first out first."""

    eliminated = [contestant for contestant in contestants if contestant.placement is not None]
    return sorted(eliminated, key=lambda contestant: -(contestant.placement or 0))
