"""Pydantic models for API I/O."""

from .picks import (
    AdminConfigRequest,
    AdminConfigResponse,
    DeletePickRequest,
    DeletePickResponse,
    PickSubmissionRequest,
    SeasonPicksResponse,
    SubmissionAccepted,
)
from .standings import (
    ScoredAlternateResponse,
    ScoredPickResponse,
    SeasonProgressResponse,
    StandingResponse,
    StandingsResponse,
)

__all__ = [
    "AdminConfigRequest",
    "AdminConfigResponse",
    "DeletePickRequest",
    "DeletePickResponse",
    "PickSubmissionRequest",
    "SeasonPicksResponse",
    "SubmissionAccepted",
    "ScoredAlternateResponse",
    "ScoredPickResponse",
    "SeasonProgressResponse",
    "StandingResponse",
    "StandingsResponse",
]
