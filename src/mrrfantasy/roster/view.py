"""Join stored rosters against the catalog for display."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from mrrfantasy.catalog import PlayerCatalog
from mrrfantasy.models import DisplayRoster, PlayerRecord, StarterView, StoredRoster


logger = logging.getLogger(__name__)


def materialize(roster: StoredRoster, catalog: PlayerCatalog) -> DisplayRoster:
    """Build the display form of ``roster`` from the latest catalog values.

    Only starters contribute to ``total_points``. The total is recomputed on
    every call, so it always reflects current player totals.
    """

    starters: List[StarterView] = []
    for assignment in roster.starters:
        player = catalog.get(assignment.player_id)
        if player is None:
            logger.warning("Starter %s on roster %s missing from catalog", assignment.player_id, roster.owner_id)
            continue
        starters.append(StarterView(player=player, assigned_position=assignment.assigned_position))

    bench: List[PlayerRecord] = []
    for player_id in roster.bench_player_ids:
        player = catalog.get(player_id)
        if player is None:
            logger.warning("Bench player %s on roster %s missing from catalog", player_id, roster.owner_id)
            continue
        bench.append(player)

    return DisplayRoster(
        owner_id=roster.owner_id,
        team_name=roster.team_name,
        captain_id=roster.captain_id,
        starters=tuple(starters),
        bench=tuple(bench),
        total_points=sum(starter.player.total_points for starter in starters),
    )


def points_breakdown(display: DisplayRoster) -> Dict[str, Any]:
    return {
        "owner_id": display.owner_id,
        "captain_id": display.captain_id,
        "total_points": display.total_points,
        "starters": [
            {
                "player_id": starter.player.player_id,
                "name": starter.player.name,
                "assigned_position": starter.assigned_position.value,
                "total_points": starter.player.total_points,
            }
            for starter in display.starters
        ],
        "bench": [
            {
                "player_id": player.player_id,
                "name": player.name,
                "position": player.position.value,
                "total_points": player.total_points,
            }
            for player in display.bench
        ],
    }
