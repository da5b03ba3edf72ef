"""Load finalized weekly statistics from CSV."""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import List, Mapping, Optional

from mrrfantasy.models import WeeklyPerformance


DEFAULT_PERFORMANCE_MAPPING = {
    "player_id": "player_id",
    "goals": "goals",
    "assists": "assists",
    "clean_sheets": "clean_sheets",
    "saves": "saves",
    "tackles": "tackles",
}

_COUNTER_FIELDS = ("goals", "assists", "clean_sheets", "saves", "tackles")


def _parse_count(raw: Optional[str], *, field: str) -> int:
    if raw is None:
        return 0
    text = raw.strip()
    if not text:
        return 0
    if not re.fullmatch(r"\d+", text):
        raise ValueError(f"{field} '{raw}' is not a non-negative integer")
    return int(text)


def load_performance_csv(
    path: Path,
    *,
    week_number: int,
    mapping: Mapping[str, str] | None = None,
) -> List[WeeklyPerformance]:
    mapping = mapping or DEFAULT_PERFORMANCE_MAPPING
    performances: List[WeeklyPerformance] = []
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            player_id = (row.get(mapping.get("player_id", "player_id")) or "").strip()
            if not player_id:
                continue
            counters = {
                field: _parse_count(row.get(mapping.get(field, field)), field=field)
                for field in _COUNTER_FIELDS
            }
            performances.append(
                WeeklyPerformance(player_id=player_id, week_number=week_number, **counters)
            )
    return performances
