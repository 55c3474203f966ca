"""Submission checks performed before picks are stored or scored."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from draftpool.models import PickSubmission


logger = logging.getLogger(__name__)


class SubmissionRejected(Exception):
    """A submission failed intake validation."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def normalize_player_name(name: str) -> str:
    return name.strip().lower()


def _parse_deadline(raw: Any) -> Optional[datetime]:
    if raw in (None, ""):
        return None
    if isinstance(raw, datetime):
        deadline = raw
    else:
        try:
            deadline = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Ignoring unparsable deadline in season config: %r", raw)
            return None
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    return deadline


def _config_count(config: Mapping[str, Any], key: str) -> Optional[int]:
    raw = config.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise SubmissionRejected(f"invalid {key} in season config: {raw!r}", 500) from exc


def validate_submission(
    config: Mapping[str, Any],
    submission: PickSubmission,
    *,
    now: Optional[datetime] = None,
) -> None:
    """Raise :class:`SubmissionRejected` when ``submission`` breaks ``config``.

    ``config`` is the per-season intake configuration (``deadline``, ``open``,
    ``contestants`` and optionally ``picksPerPlayer``/``alternates``). Missing
    keys are not enforced.
    """

    if not config:
        return

    now = now or datetime.now(timezone.utc)
    deadline = _parse_deadline(config.get("deadline"))
    if deadline is not None and now >= deadline:
        raise SubmissionRejected("submissions are closed", 403)
    if config.get("open") is False:
        raise SubmissionRejected("submissions are not open", 403)

    chosen = [*submission.picks, *submission.alternates]
    roster = config.get("contestants")
    if roster:
        valid = set(roster)
        invalid = [name for name in chosen if name not in valid]
        if invalid:
            raise SubmissionRejected(f"invalid contestants: {', '.join(invalid)}")

    picks_per_player = _config_count(config, "picksPerPlayer")
    if picks_per_player is not None and len(submission.picks) != picks_per_player:
        raise SubmissionRejected(f"expected {picks_per_player} picks, got {len(submission.picks)}")
    alternate_slots = _config_count(config, "alternates")
    if alternate_slots is not None and len(submission.alternates) > alternate_slots:
        raise SubmissionRejected(f"at most {alternate_slots} alternates allowed")

    duplicates = sorted({name for name in chosen if chosen.count(name) > 1})
    if duplicates:
        raise SubmissionRejected(f"duplicate contestants: {', '.join(duplicates)}")
