"""Per-week player statistics."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import Position


class WeeklyPerformance(BaseModel):
    """Finalized counters for one player in one match week."""

    player_id: str = Field(..., min_length=1)
    week_number: int = Field(..., ge=1)
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    clean_sheets: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    tackles: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class PerformanceRecord(WeeklyPerformance):
    """Stored performance with the computed point total cached alongside it."""

    player_name: str
    position: Position
    total_points: int
