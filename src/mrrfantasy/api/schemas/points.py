from __future__ import annotations

from typing import List

from pydantic import BaseModel

from mrrfantasy.models import Position


class PerformanceResponse(BaseModel):
    player_id: str
    player_name: str
    position: Position
    week_number: int
    goals: int
    assists: int
    clean_sheets: int
    saves: int
    tackles: int
    total_points: int


class BreakdownPlayer(BaseModel):
    player_id: str
    name: str
    total_points: int
    assigned_position: Position | None = None
    position: Position | None = None


class PointsBreakdownResponse(BaseModel):
    owner_id: str
    captain_id: str | None
    total_points: int
    starters: List[BreakdownPlayer]
    bench: List[BreakdownPlayer]
