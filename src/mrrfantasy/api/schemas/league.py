from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class StandingResponse(BaseModel):
    user_id: str
    display_name: str
    team_name: str | None
    total_points: int


class LeagueResponse(BaseModel):
    league_id: str
    name: str
    invite_code: str
    created_by: str
    created_at: datetime


class LeagueDetailResponse(BaseModel):
    league: LeagueResponse
    members: List[StandingResponse]
