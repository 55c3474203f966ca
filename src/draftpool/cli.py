"""Command-line interface for scoring a season's standings."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Sequence

from draftpool.api.schemas import StandingResponse
from draftpool.config_loader import (
    SeasonDataError,
    elimination_order,
    featured_season,
    load_season_bundle,
    load_seasons,
    merge_submissions,
    season_progress,
)
from draftpool.persistence import PickStore
from draftpool.scoring import Standing, compute_standings


def ordinal(value: int | None) -> str:
    if value is None:
        return "?"
    suffixes = ["th", "st", "nd", "rd"]
    remainder = value % 100
    if 11 <= remainder <= 13:
        return f"{value}th"
    return f"{value}{suffixes[value % 10] if value % 10 < 4 else 'th'}"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute draft standings for a season")
    parser.add_argument("data_dir", type=Path, help="Directory holding seasons.json and season folders")
    parser.add_argument("season", nargs="?", default=None, help="Season id (defaults to the featured season)")
    parser.add_argument("--output", type=Path, default=None, help="Optional CSV path for the standings")
    parser.add_argument("--json", dest="json_path", type=Path, default=None, help="Optional JSON dump path")
    parser.add_argument(
        "--live-db",
        type=Path,
        default=None,
        help="SQLite pick store whose submissions override static picks for active seasons",
    )
    parser.add_argument(
        "--eliminations",
        action="store_true",
        help="Also print the elimination order",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _write_csv(path: Path, standings: list[Standing]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([
            "rank",
            "name",
            "total",
            "picks",
            "alternates",
            "swapped_out",
            "swapped_in",
            "winner_bonus",
            "runner_up_bonus",
        ])
        for rank, standing in enumerate(standings, start=1):
            swapped_out = next((p.contestant_name for p in standing.picks if p.swapped_out), "")
            swapped_in = next((a.contestant_name for a in standing.alternates if a.swapped_in), "")
            writer.writerow([
                rank,
                standing.name,
                standing.total,
                " | ".join(pick.contestant_name for pick in standing.picks),
                " | ".join(alt.contestant_name for alt in standing.alternates),
                swapped_out,
                swapped_in,
                standing.winner_bonus_awarded,
                standing.runner_up_bonus_awarded,
            ])


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        season_id = args.season
        if season_id is None:
            featured = featured_season(load_seasons(args.data_dir))
            if featured is None:
                raise SystemExit("no active or completed seasons found")
            season_id = featured.id
        bundle = load_season_bundle(args.data_dir, season_id)
    except SeasonDataError as exc:
        raise SystemExit(str(exc)) from exc

    submissions = list(bundle.picks)
    if args.live_db and bundle.season.status == "active":
        submissions = merge_submissions(submissions, PickStore(args.live_db).list_submissions(season_id))

    standings = compute_standings(bundle.season, bundle.contestants, submissions)
    progress = season_progress(bundle.season, bundle.contestants)

    title = bundle.season.name or season_id
    if bundle.season.status == "active":
        print(f"{title}: {progress.remaining} remain, {progress.eliminated} eliminated")
    else:
        print(f"{title}: final results")

    if not standings:
        print("No picks submitted yet.")
    for rank, standing in enumerate(standings, start=1):
        print(f"{rank:>3}  {standing.name:<24} {standing.total}")

    if args.eliminations:
        for contestant in elimination_order(bundle.contestants):
            detail = contestant.note or contestant.method or ""
            print(f"{ordinal(contestant.placement):>5}  {contestant.name}  {detail}".rstrip())

    if args.output:
        _write_csv(args.output, standings)
        print(f"Wrote standings CSV to {args.output}")
    if args.json_path:
        payload = {
            "season": season_id,
            "standings": [
                StandingResponse.from_standing(standing, rank).model_dump(by_alias=True)
                for rank, standing in enumerate(standings, start=1)
            ],
        }
        args.json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote standings JSON to {args.json_path}")


if __name__ == "__main__":
    main()
