"""Roster shapes: candidate selections, stored rosters, and display views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import PlayerRecord, Position


class StarterAssignment(BaseModel):
    """A starter fielded in a specific position."""

    player_id: str = Field(..., min_length=1)
    assigned_position: Position

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class RosterSelection:
    """Candidate roster as submitted, before any rule has been checked."""

    starters: Tuple[StarterAssignment, ...]
    bench_player_ids: Tuple[str, ...]
    captain_id: str

    @classmethod
    def build(
        cls,
        starters: Iterable[StarterAssignment],
        bench_player_ids: Iterable[str],
        captain_id: str,
    ) -> "RosterSelection":
        return cls(
            starters=tuple(starters),
            bench_player_ids=tuple(bench_player_ids),
            captain_id=captain_id,
        )

    @property
    def starter_ids(self) -> Tuple[str, ...]:
        return tuple(assignment.player_id for assignment in self.starters)

    @property
    def all_player_ids(self) -> Tuple[str, ...]:
        return self.starter_ids + self.bench_player_ids


@dataclass(frozen=True)
class ValidatedRoster:
    """Selection that passed every rule, bound to its owner."""

    owner_id: str
    captain_id: str
    starters: Tuple[StarterAssignment, ...]
    bench_player_ids: Tuple[str, ...]


@dataclass(frozen=True)
class StoredRoster:
    owner_id: str
    team_name: str
    captain_id: Optional[str] = None
    starters: Tuple[StarterAssignment, ...] = ()
    bench_player_ids: Tuple[str, ...] = ()
    generation: int = 0


@dataclass(frozen=True)
class StarterView:
    player: PlayerRecord
    assigned_position: Position


@dataclass(frozen=True)
class DisplayRoster:
    """Stored roster joined against the current catalog."""

    owner_id: str
    team_name: str
    captain_id: Optional[str]
    starters: Tuple[StarterView, ...] = field(default_factory=tuple)
    bench: Tuple[PlayerRecord, ...] = field(default_factory=tuple)
    total_points: int = 0
