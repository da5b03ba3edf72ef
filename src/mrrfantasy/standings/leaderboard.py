"""League standings computed at read time."""

from __future__ import annotations

from typing import List, Mapping, Sequence

from mrrfantasy.catalog import PlayerCatalog
from mrrfantasy.models import Membership, Standing, StoredRoster
from mrrfantasy.roster.view import materialize


def compute_standings(
    members: Sequence[Membership],
    rosters: Mapping[str, StoredRoster],
    catalog: PlayerCatalog,
) -> List[Standing]:
    """Rank league members by the starter points of their rosters.

    Members without a roster score 0 and have no team name. The sort is
    stable: members with equal totals keep the order they were supplied in,
    which carries no meaning beyond that.
    """

    standings: List[Standing] = []
    for member in members:
        roster = rosters.get(member.user_id)
        if roster is None:
            standings.append(
                Standing(
                    user_id=member.user_id,
                    display_name=member.display_name,
                    team_name=None,
                    total_points=0,
                )
            )
            continue
        display = materialize(roster, catalog)
        standings.append(
            Standing(
                user_id=member.user_id,
                display_name=member.display_name,
                team_name=roster.team_name,
                total_points=display.total_points,
            )
        )
    return sorted(standings, key=lambda standing: -standing.total_points)
