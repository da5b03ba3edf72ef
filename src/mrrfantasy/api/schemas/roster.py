from __future__ import annotations

from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, Field

from mrrfantasy.models import DisplayRoster, PlayerRecord, Position, StarterAssignment


class CreateTeamRequest(BaseModel):
    name: str = Field(..., min_length=1)


class SetPlayersRequest(BaseModel):
    starters: List[StarterAssignment]
    bench_player_ids: List[str]
    captain_id: str


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    position: Position
    secondary_position: Position | None
    is_marquee: bool
    price: Decimal
    total_points: int
    team_name: str
    photo_url: str | None

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerResponse":
        return cls.model_validate(record.model_dump())


class StarterResponse(BaseModel):
    player: PlayerResponse
    assigned_position: Position


class TeamResponse(BaseModel):
    owner_id: str
    team_name: str
    captain_id: str | None
    starters: List[StarterResponse]
    bench: List[PlayerResponse]
    total_points: int

    @classmethod
    def from_display(cls, display: DisplayRoster) -> "TeamResponse":
        return cls(
            owner_id=display.owner_id,
            team_name=display.team_name,
            captain_id=display.captain_id,
            starters=[
                StarterResponse(
                    player=PlayerResponse.from_record(starter.player),
                    assigned_position=starter.assigned_position,
                )
                for starter in display.starters
            ],
            bench=[PlayerResponse.from_record(player) for player in display.bench],
            total_points=display.total_points,
        )


class RejectionResponse(BaseModel):
    reason: str
    detail: str
    context: dict[str, Any] = Field(default_factory=dict)
