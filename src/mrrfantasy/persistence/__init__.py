"""SQLite persistence for players, weekly points, rosters, and leagues."""

from __future__ import annotations

import secrets
import sqlite3
import string
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence
from uuid import uuid4

from mrrfantasy.catalog import InMemoryCatalog
from mrrfantasy.models import (
    LeagueRecord,
    Membership,
    PerformanceRecord,
    PlayerRecord,
    Position,
    StarterAssignment,
    StoredRoster,
    ValidatedRoster,
    WeeklyPerformance,
)
from mrrfantasy.scoring import score_performance


INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 8
_INVITE_CODE_ATTEMPTS = 5


class ConflictError(RuntimeError):
    """Raised when a write would duplicate something that must be unique."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class FantasyStore:
    """SQLite-backed store for the fantasy competition.

    Every multi-row write runs inside a single ``BEGIN IMMEDIATE`` transaction,
    so concurrent writers serialize on the database lock and readers never see
    half of a roster replacement.
    """

    def __init__(self, db_path: Path | str, *, timeout: float = 5.0):
        self._use_uri = isinstance(db_path, str) and db_path.startswith("file:")
        self.db_path: Path | str = db_path if self._use_uri else Path(db_path)
        self._timeout = timeout
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(
            self.db_path,
            uri=self._use_uri,
            timeout=self._timeout,
            isolation_level=None,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _ensure_schema(self) -> None:
        with self._transaction() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                position TEXT NOT NULL,
                secondary_position TEXT,
                is_marquee INTEGER NOT NULL DEFAULT 0,
                price TEXT NOT NULL,
                total_points INTEGER NOT NULL DEFAULT 0,
                team_name TEXT NOT NULL,
                photo_url TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS performances (
                player_id TEXT NOT NULL REFERENCES players(id),
                week_number INTEGER NOT NULL,
                goals INTEGER NOT NULL,
                assists INTEGER NOT NULL,
                clean_sheets INTEGER NOT NULL,
                saves INTEGER NOT NULL,
                tackles INTEGER NOT NULL,
                total_points INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (player_id, week_number)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS rosters (
                owner_id TEXT PRIMARY KEY,
                team_name TEXT NOT NULL,
                captain_id TEXT,
                generation INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS roster_slots (
                owner_id TEXT NOT NULL REFERENCES rosters(owner_id),
                slot_index INTEGER NOT NULL,
                player_id TEXT NOT NULL REFERENCES players(id),
                is_bench INTEGER NOT NULL,
                assigned_position TEXT,
                PRIMARY KEY (owner_id, slot_index)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS leagues (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                invite_code TEXT NOT NULL UNIQUE,
                created_by TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS league_members (
                league_id TEXT NOT NULL REFERENCES leagues(id),
                user_id TEXT NOT NULL,
                joined_at TEXT NOT NULL,
                PRIMARY KEY (league_id, user_id)
            )
            """
        )

    # Users

    def ensure_user(self, user_id: str, full_name: str) -> None:
        now = _now_iso()
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO users (id, full_name, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET full_name = excluded.full_name, updated_at = excluded.updated_at
                """,
                (user_id, full_name, now, now),
            )

    def get_user_name(self, user_id: str) -> Optional[str]:
        with self._connection() as conn:
            row = conn.execute("SELECT full_name FROM users WHERE id = ?", (user_id,)).fetchone()
        return row["full_name"] if row is not None else None

    # Players

    def upsert_players(self, records: Iterable[PlayerRecord]) -> int:
        """Insert or refresh catalog rows. Cumulative points are never overwritten."""

        now = _now_iso()
        count = 0
        with self._transaction() as conn:
            for record in records:
                conn.execute(
                    """
                    INSERT INTO players (
                        id, name, position, secondary_position, is_marquee, price,
                        total_points, team_name, photo_url, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name,
                        position = excluded.position,
                        secondary_position = excluded.secondary_position,
                        is_marquee = excluded.is_marquee,
                        price = excluded.price,
                        team_name = excluded.team_name,
                        photo_url = excluded.photo_url,
                        updated_at = excluded.updated_at
                    """,
                    (
                        record.player_id,
                        record.name,
                        record.position.value,
                        record.secondary_position.value if record.secondary_position else None,
                        int(record.is_marquee),
                        str(record.price),
                        record.total_points,
                        record.team_name,
                        record.photo_url,
                        now,
                        now,
                    ),
                )
                count += 1
        return count

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row is not None else None

    def list_players(self) -> List[PlayerRecord]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM players ORDER BY total_points DESC, name ASC").fetchall()
        return [self._row_to_player(row) for row in rows]

    def catalog(self) -> InMemoryCatalog:
        return InMemoryCatalog(self.list_players())

    # Weekly points

    def record_performance(self, performance: WeeklyPerformance, *, replace: bool = False) -> PerformanceRecord:
        """Store a week's counters with their computed total and refresh the player's cumulative points."""

        with self._transaction() as conn:
            player_row = conn.execute(
                "SELECT * FROM players WHERE id = ?", (performance.player_id,)
            ).fetchone()
            if player_row is None:
                raise KeyError(f"Player {performance.player_id} not found")
            existing = conn.execute(
                "SELECT 1 FROM performances WHERE player_id = ? AND week_number = ?",
                (performance.player_id, performance.week_number),
            ).fetchone()
            if existing is not None and not replace:
                raise ConflictError(
                    f"Points for player {performance.player_id} in week {performance.week_number} already recorded"
                )
            position = Position(player_row["position"])
            total = score_performance(position, performance)
            conn.execute(
                """
                INSERT OR REPLACE INTO performances (
                    player_id, week_number, goals, assists, clean_sheets, saves,
                    tackles, total_points, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    performance.player_id,
                    performance.week_number,
                    performance.goals,
                    performance.assists,
                    performance.clean_sheets,
                    performance.saves,
                    performance.tackles,
                    total,
                    _now_iso(),
                ),
            )
            conn.execute(
                """
                UPDATE players
                SET total_points = (
                        SELECT COALESCE(SUM(total_points), 0) FROM performances WHERE player_id = ?
                    ),
                    updated_at = ?
                WHERE id = ?
                """,
                (performance.player_id, _now_iso(), performance.player_id),
            )
        return PerformanceRecord(
            **performance.model_dump(include=set(WeeklyPerformance.model_fields)),
            player_name=player_row["name"],
            position=position,
            total_points=total,
        )

    def list_week_performances(self, week_number: int) -> List[PerformanceRecord]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT pp.*, p.name AS player_name, p.position AS position
                FROM performances pp
                INNER JOIN players p ON p.id = pp.player_id
                WHERE pp.week_number = ?
                ORDER BY pp.total_points DESC, p.name ASC
                """,
                (week_number,),
            ).fetchall()
        return [self._row_to_performance(row) for row in rows]

    def list_player_performances(self, player_id: str) -> List[PerformanceRecord]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT pp.*, p.name AS player_name, p.position AS position
                FROM performances pp
                INNER JOIN players p ON p.id = pp.player_id
                WHERE pp.player_id = ?
                ORDER BY pp.week_number ASC
                """,
                (player_id,),
            ).fetchall()
        return [self._row_to_performance(row) for row in rows]

    # Rosters

    def create_roster(self, owner_id: str, team_name: str) -> StoredRoster:
        name = team_name.strip()
        if not name:
            raise ValueError("Team name cannot be empty")
        now = _now_iso()
        with self._transaction() as conn:
            existing = conn.execute("SELECT 1 FROM rosters WHERE owner_id = ?", (owner_id,)).fetchone()
            if existing is not None:
                raise ConflictError("You already have a fantasy team")
            conn.execute(
                """
                INSERT INTO rosters (owner_id, team_name, captain_id, generation, created_at, updated_at)
                VALUES (?, ?, NULL, 0, ?, ?)
                """,
                (owner_id, name, now, now),
            )
        return StoredRoster(owner_id=owner_id, team_name=name)

    def get_roster(self, owner_id: str) -> Optional[StoredRoster]:
        return self.get_rosters([owner_id]).get(owner_id)

    def get_rosters(self, owner_ids: Sequence[str]) -> Dict[str, StoredRoster]:
        if not owner_ids:
            return {}
        placeholders = ", ".join("?" for _ in owner_ids)
        with self._connection() as conn:
            rows = conn.execute(
                f"""
                SELECT r.owner_id, r.team_name, r.captain_id, r.generation,
                       s.slot_index, s.player_id, s.is_bench, s.assigned_position
                FROM rosters r
                LEFT JOIN roster_slots s ON s.owner_id = r.owner_id
                WHERE r.owner_id IN ({placeholders})
                ORDER BY r.owner_id, s.slot_index
                """,
                tuple(owner_ids),
            ).fetchall()
        return self._rows_to_rosters(rows)

    def replace_roster(self, roster: ValidatedRoster) -> StoredRoster:
        """Swap all nine slots and the captain for ``roster.owner_id`` in one transaction."""

        with self._transaction() as conn:
            existing = conn.execute(
                "SELECT team_name, generation FROM rosters WHERE owner_id = ?", (roster.owner_id,)
            ).fetchone()
            if existing is None:
                raise KeyError(f"No fantasy team for user {roster.owner_id}")
            conn.execute("DELETE FROM roster_slots WHERE owner_id = ?", (roster.owner_id,))
            slot_rows = [
                (roster.owner_id, index, assignment.player_id, 0, assignment.assigned_position.value)
                for index, assignment in enumerate(roster.starters)
            ]
            offset = len(slot_rows)
            slot_rows.extend(
                (roster.owner_id, offset + index, player_id, 1, None)
                for index, player_id in enumerate(roster.bench_player_ids)
            )
            conn.executemany(
                """
                INSERT INTO roster_slots (owner_id, slot_index, player_id, is_bench, assigned_position)
                VALUES (?, ?, ?, ?, ?)
                """,
                slot_rows,
            )
            conn.execute(
                """
                UPDATE rosters
                SET captain_id = ?, generation = generation + 1, updated_at = ?
                WHERE owner_id = ?
                """,
                (roster.captain_id, _now_iso(), roster.owner_id),
            )
        return StoredRoster(
            owner_id=roster.owner_id,
            team_name=existing["team_name"],
            captain_id=roster.captain_id,
            starters=tuple(roster.starters),
            bench_player_ids=tuple(roster.bench_player_ids),
            generation=existing["generation"] + 1,
        )

    # Leagues

    def create_league(self, name: str, created_by: str, *, invite_code: str | None = None) -> LeagueRecord:
        """Create a league and enrol its creator as the first member."""

        league_name = name.strip()
        if not league_name:
            raise ValueError("League name cannot be empty")
        attempts = 1 if invite_code else _INVITE_CODE_ATTEMPTS
        for _ in range(attempts):
            code = (invite_code or generate_invite_code()).strip().upper()
            league_id = uuid4().hex
            now = _now_iso()
            try:
                with self._transaction() as conn:
                    conn.execute(
                        """
                        INSERT INTO leagues (id, name, invite_code, created_by, created_at)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (league_id, league_name, code, created_by, now),
                    )
                    conn.execute(
                        "INSERT INTO league_members (league_id, user_id, joined_at) VALUES (?, ?, ?)",
                        (league_id, created_by, now),
                    )
            except sqlite3.IntegrityError:
                continue
            league = self.get_league(league_id)
            if league is None:  # pragma: no cover
                raise KeyError(f"League {league_id} not found after insert")
            return league
        raise ConflictError(f"Invite code {invite_code!r} is already in use" if invite_code else "Could not allocate an invite code")

    def join_league(self, invite_code: str, user_id: str) -> LeagueRecord:
        league = self.get_league_by_invite_code(invite_code)
        if league is None:
            raise KeyError("Invalid invite code")
        with self._transaction() as conn:
            existing = conn.execute(
                "SELECT 1 FROM league_members WHERE league_id = ? AND user_id = ?",
                (league.league_id, user_id),
            ).fetchone()
            if existing is not None:
                raise ConflictError("You are already a member of this league")
            conn.execute(
                "INSERT INTO league_members (league_id, user_id, joined_at) VALUES (?, ?, ?)",
                (league.league_id, user_id, _now_iso()),
            )
        return league

    def get_league(self, league_id: str) -> Optional[LeagueRecord]:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM leagues WHERE id = ?", (league_id,)).fetchone()
        return self._row_to_league(row) if row is not None else None

    def get_league_by_invite_code(self, invite_code: str) -> Optional[LeagueRecord]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM leagues WHERE invite_code = ?", (invite_code.strip().upper(),)
            ).fetchone()
        return self._row_to_league(row) if row is not None else None

    def list_members(self, league_id: str) -> List[Membership]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT lm.league_id, lm.user_id, COALESCE(u.full_name, lm.user_id) AS display_name
                FROM league_members lm
                LEFT JOIN users u ON u.id = lm.user_id
                WHERE lm.league_id = ?
                ORDER BY lm.rowid ASC
                """,
                (league_id,),
            ).fetchall()
        return [
            Membership(
                league_id=row["league_id"],
                user_id=row["user_id"],
                display_name=row["display_name"],
            )
            for row in rows
        ]

    # Row mapping

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["id"],
            name=row["name"],
            position=Position(row["position"]),
            secondary_position=Position(row["secondary_position"]) if row["secondary_position"] else None,
            is_marquee=bool(row["is_marquee"]),
            price=Decimal(row["price"]),
            total_points=row["total_points"],
            team_name=row["team_name"],
            photo_url=row["photo_url"],
        )

    def _row_to_performance(self, row: sqlite3.Row) -> PerformanceRecord:
        return PerformanceRecord(
            player_id=row["player_id"],
            week_number=row["week_number"],
            goals=row["goals"],
            assists=row["assists"],
            clean_sheets=row["clean_sheets"],
            saves=row["saves"],
            tackles=row["tackles"],
            total_points=row["total_points"],
            player_name=row["player_name"],
            position=Position(row["position"]),
        )

    def _row_to_league(self, row: sqlite3.Row) -> LeagueRecord:
        return LeagueRecord(
            league_id=row["id"],
            name=row["name"],
            invite_code=row["invite_code"],
            created_by=row["created_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def _rows_to_rosters(self, rows: Sequence[sqlite3.Row]) -> Dict[str, StoredRoster]:
        grouped: Dict[str, dict] = {}
        for row in rows:
            entry = grouped.setdefault(
                row["owner_id"],
                {
                    "team_name": row["team_name"],
                    "captain_id": row["captain_id"],
                    "generation": row["generation"],
                    "starters": [],
                    "bench": [],
                },
            )
            if row["player_id"] is None:
                continue
            if row["is_bench"]:
                entry["bench"].append(row["player_id"])
            else:
                entry["starters"].append(
                    StarterAssignment(
                        player_id=row["player_id"],
                        assigned_position=Position(row["assigned_position"]),
                    )
                )
        return {
            owner_id: StoredRoster(
                owner_id=owner_id,
                team_name=data["team_name"],
                captain_id=data["captain_id"],
                starters=tuple(data["starters"]),
                bench_player_ids=tuple(data["bench"]),
                generation=data["generation"],
            )
            for owner_id, data in grouped.items()
        }


__all__ = [
    "ConflictError",
    "FantasyStore",
    "generate_invite_code",
]
