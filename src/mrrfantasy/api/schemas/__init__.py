"""Pydantic models for API I/O."""

from .league import LeagueDetailResponse, LeagueResponse, StandingResponse
from .points import BreakdownPlayer, PerformanceResponse, PointsBreakdownResponse
from .roster import (
    CreateTeamRequest,
    PlayerResponse,
    RejectionResponse,
    SetPlayersRequest,
    StarterResponse,
    TeamResponse,
)

__all__ = [
    "BreakdownPlayer",
    "CreateTeamRequest",
    "LeagueDetailResponse",
    "LeagueResponse",
    "PerformanceResponse",
    "PlayerResponse",
    "PointsBreakdownResponse",
    "RejectionResponse",
    "SetPlayersRequest",
    "StandingResponse",
    "StarterResponse",
    "TeamResponse",
]
