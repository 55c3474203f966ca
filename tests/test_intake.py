from datetime import datetime, timedelta, timezone

import pytest

from draftpool.intake import SubmissionRejected, normalize_player_name, validate_submission
from draftpool.models import PickSubmission


NOW = datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)


def _submission(picks=("Eve", "Fay"), alternates=("Gus",)) -> PickSubmission:
    return PickSubmission(name="kim", picks=list(picks), alternates=list(alternates))


def test_normalize_player_name():
    assert normalize_player_name("  Benson ") == "benson"


def test_empty_config_accepts_anything():
    validate_submission({}, _submission(picks=("Nobody", "Nobody")), now=NOW)


def test_deadline_passed_is_rejected():
    config = {"deadline": (NOW - timedelta(minutes=1)).isoformat()}
    with pytest.raises(SubmissionRejected) as excinfo:
        validate_submission(config, _submission(), now=NOW)
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "submissions are closed"


def test_deadline_accepts_zulu_suffix():
    validate_submission({"deadline": "2026-02-21T00:00:00Z"}, _submission(), now=NOW)


def test_closed_season_is_rejected():
    with pytest.raises(SubmissionRejected) as excinfo:
        validate_submission({"open": False}, _submission(), now=NOW)
    assert excinfo.value.status_code == 403


def test_unknown_contestants_are_listed():
    config = {"contestants": ["Eve", "Fay", "Hal"]}
    with pytest.raises(SubmissionRejected) as excinfo:
        validate_submission(config, _submission(), now=NOW)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "invalid contestants: Gus"


def test_roster_sizes_checked_when_configured():
    config = {"picksPerPlayer": 3, "alternates": 1}
    with pytest.raises(SubmissionRejected):
        validate_submission(config, _submission(), now=NOW)
    with pytest.raises(SubmissionRejected):
        validate_submission({"alternates": 0}, _submission(), now=NOW)
    validate_submission({"picksPerPlayer": 2, "alternates": 1}, _submission(), now=NOW)


def test_duplicate_contestants_rejected():
    with pytest.raises(SubmissionRejected) as excinfo:
        validate_submission({"open": True}, _submission(alternates=("Eve",)), now=NOW)
    assert "Eve" in excinfo.value.message


def test_unparsable_deadline_is_ignored(caplog):
    with caplog.at_level("WARNING", logger="draftpool.intake"):
        validate_submission({"deadline": "next tuesday"}, _submission(), now=NOW)
    assert "next tuesday" in caplog.text


@pytest.mark.parametrize("key,value", [("picksPerPlayer", "two"), ("alternates", [1])])
def test_non_numeric_roster_size_is_a_config_error(key, value):
    with pytest.raises(SubmissionRejected) as excinfo:
        validate_submission({key: value}, _submission(), now=NOW)
    assert excinfo.value.status_code == 500
    assert key in excinfo.value.message
