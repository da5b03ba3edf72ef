"""Input adapters that normalize raw catalog and statistics files."""

from .performances import load_performance_csv
from .players import (
    PlayerRow,
    load_player_csv,
    load_players_from_csv,
    parse_flag,
    parse_position,
    parse_price,
    rows_to_players,
)

__all__ = [
    "PlayerRow",
    "load_performance_csv",
    "load_player_csv",
    "load_players_from_csv",
    "parse_flag",
    "parse_position",
    "parse_price",
    "rows_to_players",
]
