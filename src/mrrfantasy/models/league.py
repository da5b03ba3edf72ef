"""League bookkeeping records and the standings projection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LeagueRecord:
    league_id: str
    name: str
    invite_code: str
    created_by: str
    created_at: datetime


@dataclass(frozen=True)
class Membership:
    league_id: str
    user_id: str
    display_name: str


@dataclass(frozen=True)
class Standing:
    """Read-time projection of a member's position in a league."""

    user_id: str
    display_name: str
    team_name: Optional[str]
    total_points: int
