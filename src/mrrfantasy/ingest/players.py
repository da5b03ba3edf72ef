"""Helpers to load player catalog CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from mrrfantasy.models import PlayerRecord, Position


logger = logging.getLogger(__name__)

POSITION_ALIASES: dict[str, Position] = {
    "GK": Position.GK,
    "G": Position.GK,
    "GKP": Position.GK,
    "GOALKEEPER": Position.GK,
    "KEEPER": Position.GK,
    "DEF": Position.DEF,
    "D": Position.DEF,
    "DF": Position.DEF,
    "DEFENDER": Position.DEF,
    "MID": Position.MID,
    "M": Position.MID,
    "MF": Position.MID,
    "MIDFIELDER": Position.MID,
    "FWD": Position.FWD,
    "F": Position.FWD,
    "FW": Position.FWD,
    "ST": Position.FWD,
    "FORWARD": Position.FWD,
    "STRIKER": Position.FWD,
}

DEFAULT_PLAYERS_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "position": "position",
    "secondary_position": "secondary_position",
    "is_marquee": "is_marquee",
    "price": "price",
    "team_name": "team_name",
    "photo_url": "photo_url",
}


def _extract(row: Mapping[str, str], spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
    if spec is None:
        return default
    if isinstance(spec, str):
        value = row.get(spec)
        return value.strip() if value is not None else default
    parts = [row.get(col, "").strip() for col in spec if row.get(col)]
    return " ".join(parts) if parts else default


def _parse_spec(mapping: Mapping[str, str], key: str) -> Optional[str | Sequence[str]]:
    spec = mapping.get(key)
    if spec is None:
        return None
    if "|" in spec:
        return tuple(part.strip() for part in spec.split("|"))
    return spec


class PlayerRow(BaseModel):
    raw_id: str
    raw_name: str
    raw_position: str
    raw_secondary_position: Optional[str] = None
    raw_marquee: Optional[str] = None
    raw_price: str
    raw_team: str = ""
    raw_photo_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerRow":
        return cls(
            raw_id=_extract(row, _parse_spec(mapping, "player_id"), default="") or "",
            raw_name=_extract(row, _parse_spec(mapping, "name"), default="") or "",
            raw_position=_extract(row, _parse_spec(mapping, "position"), default="") or "",
            raw_secondary_position=_extract(row, _parse_spec(mapping, "secondary_position")),
            raw_marquee=_extract(row, _parse_spec(mapping, "is_marquee")),
            raw_price=_extract(row, _parse_spec(mapping, "price"), default="0") or "0",
            raw_team=_extract(row, _parse_spec(mapping, "team_name"), default="") or "",
            raw_photo_url=_extract(row, _parse_spec(mapping, "photo_url")),
        )


def load_player_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRow]:
    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [PlayerRow.from_mapping(row, mapping) for row in reader]
    return rows


def parse_position(raw: Optional[str]) -> Optional[Position]:
    if raw is None:
        return None
    token = re.sub(r"[^A-Z]", "", raw.upper())
    if not token:
        return None
    if token not in POSITION_ALIASES:
        raise ValueError(f"unknown position '{raw}'")
    return POSITION_ALIASES[token]


def parse_price(raw_price: str) -> Decimal:
    text = re.sub(r"[^0-9.\-]", "", raw_price)
    if not re.search(r"\d", text):
        raise ValueError(f"price '{raw_price}' has no digits")
    if text.startswith("-"):
        raise ValueError(f"price '{raw_price}' must not be negative")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"price '{raw_price}' is not numeric") from None


def parse_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "top", "marquee"}


def rows_to_players(rows: Iterable[PlayerRow]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for row in rows:
        if not row.raw_id or not row.raw_name:
            logger.debug("Skipping player row without id or name: %s", row)
            continue
        position = parse_position(row.raw_position)
        if position is None:
            raise ValueError(f"player {row.raw_id} has no position")
        records.append(
            PlayerRecord(
                player_id=row.raw_id,
                name=row.raw_name,
                position=position,
                secondary_position=parse_position(row.raw_secondary_position),
                is_marquee=parse_flag(row.raw_marquee),
                price=parse_price(row.raw_price),
                team_name=row.raw_team,
                photo_url=row.raw_photo_url or None,
            )
        )
    return records


def load_players_from_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    return rows_to_players(load_player_csv(path, mapping=mapping))
