"""Lightweight REST client for the mrrfantasy API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _identity_headers(user_id: str, full_name: str) -> dict[str, str]:
    return {"X-User-Id": user_id, "X-User-Name": full_name}


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the mrrfantasy REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8080")
    parser.add_argument("--user-id", default="", help="Acting user id")
    parser.add_argument("--full-name", default="", help="Acting user's full name")
    parser.add_argument("--create-team", metavar="NAME", help="Create a team for the acting user")
    parser.add_argument("--submit", type=Path, metavar="ROSTER_JSON", help="Submit a roster JSON file")
    parser.add_argument("--my-team", action="store_true", help="Fetch the acting user's team")
    parser.add_argument("--leaderboard", metavar="LEAGUE_ID", help="Fetch a league leaderboard")
    parser.add_argument("--week", type=int, help="Fetch all player points for a match week")
    args = parser.parse_args()

    headers = _identity_headers(args.user_id, args.full_name)
    with httpx.Client(base_url=args.base_url, headers=headers) as client:
        if args.create_team:
            resp = client.post("/teams", json={"name": args.create_team})
            if resp.status_code == 409:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.submit:
            payload = json.loads(args.submit.read_text(encoding="utf-8"))
            resp = client.put("/teams/my/players", json=payload)
            if resp.status_code == 400:
                rejection = resp.json()["detail"]
                raise SystemExit(f"Rejected ({rejection['reason']}): {rejection['detail']}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.my_team:
            resp = client.get("/teams/my")
            if resp.status_code == 404:
                raise SystemExit("no roster yet")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.leaderboard:
            resp = client.get(f"/leagues/{args.leaderboard}/leaderboard")
            if resp.status_code == 404:
                raise SystemExit(f"league {args.leaderboard} not found")
            resp.raise_for_status()
            for rank, row in enumerate(resp.json(), start=1):
                print(f"{rank:>3}. {row['display_name']:<24} {row['team_name'] or '-':<24} {row['total_points']:>5}")
        if args.week is not None:
            resp = client.get(f"/points/week/{args.week}")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
