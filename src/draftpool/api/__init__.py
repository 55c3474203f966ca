"""REST API for pick submission, season admin and standings."""

from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from draftpool.api.schemas import (
    AdminConfigRequest,
    AdminConfigResponse,
    DeletePickRequest,
    DeletePickResponse,
    PickSubmissionRequest,
    SeasonPicksResponse,
    SeasonProgressResponse,
    StandingResponse,
    StandingsResponse,
    SubmissionAccepted,
)
from draftpool.config_loader import (
    SeasonDataCache,
    SeasonDataError,
    SeasonNotFound,
    merge_submissions,
    season_progress,
)
from draftpool.intake import SubmissionRejected, normalize_player_name, validate_submission
from draftpool.models import PickSubmission
from draftpool.persistence import PickStore
from draftpool.scoring import compute_standings
from draftpool.settings import Settings, load_settings


logger = logging.getLogger("uvicorn.error")


async def _parse_body(request: Request, model: type[BaseModel]) -> Any:
    body = await request.body()
    try:
        return model.model_validate_json(body or b"{}")
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="invalid request body") from exc


def _submission_to_dict(submission: PickSubmission) -> dict[str, Any]:
    return {
        "name": submission.name,
        "picks": list(submission.picks),
        "alternates": list(submission.alternates),
        "submittedAt": submission.submitted_at.isoformat() if submission.submitted_at else None,
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="draftpool")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    store = PickStore(settings.db_path)
    cache = SeasonDataCache(settings.data_dir, enabled=settings.cache_seasons)
    app.state.pick_store = store
    app.state.season_cache = cache
    app.state.settings = settings

    def _require_admin(request: Request) -> None:
        expected = settings.admin_secret
        supplied = request.headers.get("Authorization") or ""
        if not expected or not secrets.compare_digest(
            supplied.encode("utf-8"), f"Bearer {expected}".encode("utf-8")
        ):
            raise HTTPException(status_code=401, detail="unauthorized")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/picks", response_model=SubmissionAccepted)
    async def submit_picks(request: Request) -> SubmissionAccepted:
        payload: PickSubmissionRequest = await _parse_body(request, PickSubmissionRequest)
        if not payload.season or not payload.name or not payload.name.strip() or payload.picks is None:
            raise HTTPException(status_code=400, detail="missing required fields: season, name, picks")

        player_name = normalize_player_name(payload.name)
        submission = PickSubmission(
            name=player_name,
            picks=payload.picks,
            alternates=payload.alternates,
        )
        try:
            validate_submission(store.get_config(payload.season), submission)
        except SubmissionRejected as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

        store.save_submission(payload.season, submission)
        cache.invalidate(payload.season)
        logger.info("Stored picks for %s in season %s", player_name, payload.season)
        return SubmissionAccepted(message=f"picks submitted for {player_name}")

    @app.get("/picks/{season_id}", response_model=SeasonPicksResponse)
    async def season_picks(season_id: str) -> SeasonPicksResponse:
        return SeasonPicksResponse(
            picks=[_submission_to_dict(item) for item in store.list_submissions(season_id)],
            config=store.get_config(season_id),
        )

    @app.post("/admin/config", response_model=AdminConfigResponse)
    async def admin_config(request: Request) -> AdminConfigResponse:
        _require_admin(request)
        payload: AdminConfigRequest = await _parse_body(request, AdminConfigRequest)
        if not payload.season:
            raise HTTPException(status_code=400, detail="season required")
        merged = store.merge_config(payload.season, payload.config_fields())
        logger.info("Updated config for season %s", payload.season)
        return AdminConfigResponse(config=merged)

    @app.post("/admin/delete-pick", response_model=DeletePickResponse)
    async def admin_delete_pick(request: Request) -> DeletePickResponse:
        _require_admin(request)
        payload: DeletePickRequest = await _parse_body(request, DeletePickRequest)
        if not payload.season or not payload.name:
            raise HTTPException(status_code=400, detail="season and name required")
        remaining = store.delete_submission(payload.season, payload.name)
        cache.invalidate(payload.season)
        return DeletePickResponse(remaining=remaining)

    @app.get("/admin/export/{season_id}")
    async def admin_export(season_id: str, request: Request) -> list[dict[str, Any]]:
        _require_admin(request)
        return store.export_submissions(season_id)

    @app.get("/seasons")
    async def list_seasons() -> list[dict[str, Any]]:
        try:
            seasons = cache.seasons()
        except SeasonDataError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return [summary.model_dump() for summary in seasons]

    @app.get("/seasons/{season_id}/standings", response_model=StandingsResponse)
    async def season_standings(season_id: str) -> StandingsResponse:
        try:
            bundle = cache.get(season_id)
        except SeasonNotFound as exc:
            raise HTTPException(status_code=404, detail="Season not found") from exc
        except SeasonDataError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        submissions = list(bundle.picks)
        if bundle.season.status == "active":
            submissions = merge_submissions(submissions, store.list_submissions(season_id))

        standings = compute_standings(bundle.season, bundle.contestants, submissions)
        progress = season_progress(bundle.season, bundle.contestants)
        return StandingsResponse(
            season=season_id,
            name=bundle.season.name,
            status=bundle.season.status,
            submissions_open=bundle.season.accepting_submissions(),
            progress=SeasonProgressResponse(
                eliminated=progress.eliminated,
                remaining=progress.remaining,
            ),
            standings=[
                StandingResponse.from_standing(standing, rank)
                for rank, standing in enumerate(standings, start=1)
            ],
        )

    return app


__all__ = ["create_app"]
