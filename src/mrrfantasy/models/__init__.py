"""Domain models shared across the scoring, roster, and storage layers."""

from .league import LeagueRecord, Membership, Standing
from .performance import PerformanceRecord, WeeklyPerformance
from .player import PlayerRecord, Position, can_play, eligible_positions
from .roster import (
    DisplayRoster,
    RosterSelection,
    StarterAssignment,
    StarterView,
    StoredRoster,
    ValidatedRoster,
)

__all__ = [
    "DisplayRoster",
    "LeagueRecord",
    "Membership",
    "PerformanceRecord",
    "PlayerRecord",
    "Position",
    "RosterSelection",
    "Standing",
    "StarterAssignment",
    "StarterView",
    "StoredRoster",
    "ValidatedRoster",
    "WeeklyPerformance",
    "can_play",
    "eligible_positions",
]
