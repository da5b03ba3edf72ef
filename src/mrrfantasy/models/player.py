"""Canonical player models shared across ingestion, validation, and scoring."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.config import ConfigDict


class Position(str, Enum):
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


class PlayerRecord(BaseModel):
    """Catalog entry for a footballer. Written by data loading, read-only elsewhere."""

    player_id: str = Field(..., min_length=1)
    name: str
    position: Position
    secondary_position: Optional[Position] = None
    is_marquee: bool = False
    price: Decimal = Field(..., ge=0)
    total_points: int = 0
    team_name: str = ""
    photo_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("secondary_position")
    @classmethod
    def _drop_redundant_secondary(
        cls, value: Optional[Position], info: ValidationInfo
    ) -> Optional[Position]:
        if value is not None and value == info.data.get("position"):
            return None
        return value


def eligible_positions(player: PlayerRecord) -> Tuple[Position, ...]:
    """Positions a player may be fielded in, primary first."""

    if player.secondary_position is None:
        return (player.position,)
    return (player.position, player.secondary_position)


def can_play(player: PlayerRecord, position: Position) -> bool:
    return position in eligible_positions(player)
