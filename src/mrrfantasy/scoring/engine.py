"""Fantasy points formula for a player's week."""

from __future__ import annotations

from typing import Mapping

from mrrfantasy.models.performance import WeeklyPerformance
from mrrfantasy.models.player import Position


GOAL_POINTS: Mapping[Position, int] = {
    Position.FWD: 10,
    Position.MID: 8,
    Position.DEF: 12,
    Position.GK: 12,
}
ASSIST_POINTS = 5
CLEAN_SHEET_POINTS = 6
SAVE_POINTS = 2
TACKLE_POINTS = 2

_CLEAN_SHEET_POSITIONS = frozenset({Position.DEF, Position.GK})
_SAVE_POSITIONS = frozenset({Position.GK})


def score(
    position: Position,
    goals: int = 0,
    assists: int = 0,
    clean_sheets: int = 0,
    saves: int = 0,
    tackles: int = 0,
) -> int:
    """Return the points earned by a player in ``position`` for one week.

    Goals are weighted by position (defensive goals are worth the most),
    clean sheets only count for defenders and goalkeepers, and saves only
    count for goalkeepers. Assists and tackles score the same everywhere.
    """

    goal_points = goals * GOAL_POINTS[position]
    assist_points = assists * ASSIST_POINTS
    clean_sheet_points = clean_sheets * CLEAN_SHEET_POINTS if position in _CLEAN_SHEET_POSITIONS else 0
    save_points = saves * SAVE_POINTS if position in _SAVE_POSITIONS else 0
    tackle_points = tackles * TACKLE_POINTS
    return goal_points + assist_points + clean_sheet_points + save_points + tackle_points


def score_performance(position: Position, performance: WeeklyPerformance) -> int:
    return score(
        position,
        goals=performance.goals,
        assists=performance.assists,
        clean_sheets=performance.clean_sheets,
        saves=performance.saves,
        tackles=performance.tackles,
    )
