"""Lightweight REST client for the draftpool API."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

import httpx


def _split_names(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the draftpool REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("season", help="Season id")
    parser.add_argument("--standings", action="store_true", help="Print the season standings and exit")
    parser.add_argument("--list-picks", action="store_true", help="List stored submissions and exit")
    parser.add_argument("--submit", metavar="NAME", help="Submit picks under this player name")
    parser.add_argument("--picks", default="", help="Comma-separated pick names")
    parser.add_argument("--alternates", default="", help="Comma-separated alternate names")
    parser.add_argument("--export", action="store_true", help="Export submissions (admin)")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported JSON")
    parser.add_argument("--config", default="", help="JSON object merged into the season config (admin)")
    parser.add_argument(
        "--token",
        default=os.getenv("DRAFTPOOL_ADMIN_SECRET", ""),
        help="Admin bearer token (defaults to DRAFTPOOL_ADMIN_SECRET)",
    )
    args = parser.parse_args()

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else {}

    with httpx.Client(base_url=args.base_url, headers=headers) as client:
        if args.config:
            try:
                config = json.loads(args.config)
            except json.JSONDecodeError as exc:
                raise SystemExit(f"Invalid config JSON: {exc}") from exc
            resp = client.post("/admin/config", json={"season": args.season, **config})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.submit:
            picks = _split_names(args.picks)
            if not picks:
                raise SystemExit("--picks is required with --submit")
            resp = client.post(
                "/picks",
                json={
                    "season": args.season,
                    "name": args.submit,
                    "picks": picks,
                    "alternates": _split_names(args.alternates),
                },
            )
            if resp.status_code >= 400:
                raise SystemExit(f"submission rejected: {resp.json().get('detail', resp.text)}")
            print(resp.json()["message"])

        if args.list_picks:
            resp = client.get(f"/picks/{args.season}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))

        if args.export:
            resp = client.get(f"/admin/export/{args.season}")
            resp.raise_for_status()
            if args.export_path:
                args.export_path.write_text(json.dumps(resp.json(), indent=2))
                print(f"Export saved to {args.export_path}")
            else:
                print(json.dumps(resp.json(), indent=2))

        if args.standings:
            resp = client.get(f"/seasons/{args.season}/standings")
            if resp.status_code == 404:
                raise SystemExit(f"season {args.season} not found")
            resp.raise_for_status()
            payload = resp.json()
            for entry in payload["standings"]:
                print(f"{entry['rank']:>3}  {entry['name']:<24} {entry['total']}")


if __name__ == "__main__":
    main()
