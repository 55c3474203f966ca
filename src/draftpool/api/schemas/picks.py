from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class PickSubmissionRequest(BaseModel):
    season: str | None = None
    name: str | None = None
    picks: List[str] | None = None
    alternates: List[str] = Field(default_factory=list)


class SubmissionAccepted(BaseModel):
    ok: bool = True
    message: str


class SeasonPicksResponse(BaseModel):
    picks: List[dict[str, Any]]
    config: dict[str, Any]


class AdminConfigRequest(BaseModel):
    season: str | None = None

    model_config = ConfigDict(extra="allow")

    def config_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class AdminConfigResponse(BaseModel):
    ok: bool = True
    config: dict[str, Any]


class DeletePickRequest(BaseModel):
    season: str | None = None
    name: str | None = None


class DeletePickResponse(BaseModel):
    ok: bool = True
    remaining: int
