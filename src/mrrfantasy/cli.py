"""Command-line interface for catalog loading, scoring, and league bookkeeping."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from mrrfantasy.config import configure_logging, get_rules, iter_rules, load_settings
from mrrfantasy.ingest import load_performance_csv, load_players_from_csv
from mrrfantasy.models import Position, RosterSelection, StarterAssignment
from mrrfantasy.persistence import ConflictError, FantasyStore
from mrrfantasy.roster import RosterRejected, validate_roster
from mrrfantasy.scoring import score
from mrrfantasy.standings import compute_standings


logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the fantasy league from the command line")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path (overrides MRRFANTASY_DB_PATH)")
    sub = parser.add_subparsers(dest="command", required=True)

    load_players = sub.add_parser("load-players", help="Load or refresh the player catalog from CSV")
    load_players.add_argument("players", type=Path, help="Players CSV")
    load_players.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for CSV columns (e.g., name=First Name|Last Name)",
    )

    record_week = sub.add_parser("record-week", help="Record a week of player statistics from CSV")
    record_week.add_argument("stats", type=Path, help="Statistics CSV")
    record_week.add_argument("--week", type=int, required=True, help="Match week number")
    record_week.add_argument("--replace", action="store_true", help="Overwrite statistics already recorded")

    score_cmd = sub.add_parser("score", help="Compute points for a single stat line")
    score_cmd.add_argument("position", choices=[position.value for position in Position])
    for counter in ("goals", "assists", "clean-sheets", "saves", "tackles"):
        score_cmd.add_argument(f"--{counter}", type=int, default=0)

    validate = sub.add_parser("validate", help="Check a roster JSON file against the catalog")
    validate.add_argument("roster", type=Path, help="JSON with starters, bench_player_ids, captain_id")
    validate.add_argument("--owner-name", required=True, help="Full name of the roster owner")
    validate.add_argument(
        "--rules",
        default="default",
        choices=[rules.name for rules in iter_rules()],
        help="Squad rule set",
    )

    create_league = sub.add_parser("create-league", help="Create a league and print its invite code")
    create_league.add_argument("name")
    create_league.add_argument("--owner", required=True, help="User id of the league creator")

    join_league = sub.add_parser("join-league", help="Add a user to a league by invite code")
    join_league.add_argument("invite_code")
    join_league.add_argument("--user", required=True, help="User id joining the league")

    standings = sub.add_parser("standings", help="Print a league leaderboard")
    standings.add_argument("league_id")

    sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _load_selection(path: Path) -> RosterSelection:
    data = json.loads(path.read_text(encoding="utf-8"))
    return RosterSelection.build(
        (StarterAssignment.model_validate(item) for item in data.get("starters", [])),
        data.get("bench_player_ids", []),
        data.get("captain_id", ""),
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    configure_logging(settings)

    if args.command == "score":
        print(
            score(
                Position(args.position),
                goals=args.goals,
                assists=args.assists,
                clean_sheets=args.clean_sheets,
                saves=args.saves,
                tackles=args.tackles,
            )
        )
        return 0

    if args.command == "serve":
        import uvicorn

        from mrrfantasy.api import create_app

        store = FantasyStore(args.db or settings.db_path)
        uvicorn.run(create_app(store), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        return 0

    store = FantasyStore(args.db or settings.db_path)

    if args.command == "load-players":
        mapping = _parse_mapping(args.column)
        records = load_players_from_csv(args.players, mapping=mapping or None)
        count = store.upsert_players(records)
        print(f"Loaded {count} players into the catalog")
        return 0

    if args.command == "record-week":
        performances = load_performance_csv(args.stats, week_number=args.week)
        recorded = 0
        skipped: list[str] = []
        for performance in performances:
            try:
                store.record_performance(performance, replace=args.replace)
            except (KeyError, ConflictError) as exc:
                logger.warning("Skipping %s: %s", performance.player_id, exc)
                skipped.append(performance.player_id)
                continue
            recorded += 1
        print(f"Recorded {recorded} stat lines for week {args.week}")
        if skipped:
            preview = ", ".join(skipped[:5])
            more = len(skipped) - 5
            suffix = f", +{more} more" if more > 0 else ""
            print(f"Skipped: {preview}{suffix}")
        return 0 if not skipped else 1

    if args.command == "validate":
        catalog = store.catalog()
        outcome = validate_roster(
            _load_selection(args.roster),
            owner_id="cli",
            owner_full_name=args.owner_name,
            catalog=catalog,
            rules=get_rules(args.rules),
        )
        if isinstance(outcome, RosterRejected):
            print(f"Rejected ({outcome.reason.value}): {outcome.detail}")
            return 1
        print("Roster is valid")
        return 0

    if args.command == "create-league":
        try:
            league = store.create_league(args.name, args.owner)
        except (ValueError, ConflictError) as exc:
            print(exc)
            return 1
        print(f"Created league {league.league_id} with invite code {league.invite_code}")
        return 0

    if args.command == "join-league":
        try:
            league = store.join_league(args.invite_code, args.user)
        except KeyError as exc:
            print(exc.args[0])
            return 1
        except ConflictError as exc:
            print(exc)
            return 1
        print(f"{args.user} joined {league.name}")
        return 0

    if args.command == "standings":
        league = store.get_league(args.league_id)
        if league is None:
            print(f"League {args.league_id} not found")
            return 1
        members = store.list_members(league.league_id)
        rosters = store.get_rosters([member.user_id for member in members])
        print(league.name)
        for rank, standing in enumerate(compute_standings(members, rosters, store.catalog()), start=1):
            team = standing.team_name or "-"
            print(f"{rank:>3}. {standing.display_name:<24} {team:<24} {standing.total_points:>5}")
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
