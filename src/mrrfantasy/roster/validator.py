"""Roster submission rules.

Validation is an ordered pipeline of pure checks. The first check that fails
decides the rejection reported back to the caller; later checks never run.
Cheap structural checks come before catalog lookups, and price summation
comes last but one.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from mrrfantasy.catalog import PlayerCatalog
from mrrfantasy.config.rules import DEFAULT_RULES, OUTFIELD_POSITIONS, SquadRules
from mrrfantasy.models import (
    PlayerRecord,
    Position,
    RosterSelection,
    ValidatedRoster,
    can_play,
    eligible_positions,
)


logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    WRONG_ROSTER_SIZE = "wrong_roster_size"
    DUPLICATE_PLAYER = "duplicate_player"
    CAPTAIN_NOT_STARTER = "captain_not_starter"
    UNKNOWN_PLAYER = "unknown_player"
    INVALID_FORMATION = "invalid_formation"
    INELIGIBLE_POSITION = "ineligible_position"
    CAPTAIN_SHARES_OWNER_NAME = "captain_shares_owner_name"
    TOO_MANY_MARQUEE = "too_many_marquee"
    OVER_BUDGET = "over_budget"
    INVALID_BENCH = "invalid_bench"


@dataclass(frozen=True)
class RosterAccepted:
    roster: ValidatedRoster

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RosterRejected:
    reason: RejectionReason
    detail: str
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False


ValidationOutcome = Union[RosterAccepted, RosterRejected]


@dataclass(frozen=True)
class _ResolvedRoster:
    selection: RosterSelection
    players: Mapping[str, PlayerRecord]
    owner_full_name: str
    rules: SquadRules

    def player(self, player_id: str) -> PlayerRecord:
        return self.players[player_id]


_StructuralCheck = Callable[[RosterSelection, SquadRules], Optional[RosterRejected]]
_CatalogCheck = Callable[[_ResolvedRoster], Optional[RosterRejected]]


def _format_positions(positions: Sequence[Position]) -> str:
    return ", ".join(position.value for position in positions)


def _normalize_name(name: str) -> str:
    return name.strip().casefold()


def _check_size(selection: RosterSelection, rules: SquadRules) -> Optional[RosterRejected]:
    if len(selection.starters) != rules.starter_count:
        return RosterRejected(
            RejectionReason.WRONG_ROSTER_SIZE,
            f"You must select exactly {rules.starter_count} starting players",
            {"starters": len(selection.starters), "expected": rules.starter_count},
        )
    if len(selection.bench_player_ids) != rules.bench_count:
        return RosterRejected(
            RejectionReason.WRONG_ROSTER_SIZE,
            f"You must select exactly {rules.bench_count} bench players",
            {"bench": len(selection.bench_player_ids), "expected": rules.bench_count},
        )
    return None


def _check_duplicates(selection: RosterSelection, rules: SquadRules) -> Optional[RosterRejected]:
    counts = Counter(selection.all_player_ids)
    duplicates = sorted(player_id for player_id, count in counts.items() if count > 1)
    if duplicates:
        return RosterRejected(
            RejectionReason.DUPLICATE_PLAYER,
            "Duplicate players are not allowed across starters and bench",
            {"player_ids": duplicates},
        )
    return None


def _check_captain_starts(selection: RosterSelection, rules: SquadRules) -> Optional[RosterRejected]:
    if selection.captain_id not in selection.starter_ids:
        return RosterRejected(
            RejectionReason.CAPTAIN_NOT_STARTER,
            f"Captain must be one of the {rules.starter_count} starting players",
            {"captain_id": selection.captain_id},
        )
    return None


def _check_formation(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    rules = resolved.rules
    counts = Counter(assignment.assigned_position for assignment in resolved.selection.starters)
    goalkeepers = counts.get(Position.GK, 0)
    if goalkeepers != rules.starting_goalkeepers:
        return RosterRejected(
            RejectionReason.INVALID_FORMATION,
            f"Starting lineup must have exactly {rules.starting_goalkeepers} GK (found {goalkeepers})",
            {"position": Position.GK.value, "expected": rules.starting_goalkeepers, "found": goalkeepers},
        )
    for position in OUTFIELD_POSITIONS:
        found = counts.get(position, 0)
        if found < rules.min_outfield_per_position:
            return RosterRejected(
                RejectionReason.INVALID_FORMATION,
                f"Starting lineup must have at least {rules.min_outfield_per_position} {position.value}",
                {"position": position.value, "expected": rules.min_outfield_per_position, "found": found},
            )
    return None


def _check_eligibility(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    for assignment in resolved.selection.starters:
        player = resolved.player(assignment.player_id)
        if can_play(player, assignment.assigned_position):
            continue
        valid = eligible_positions(player)
        return RosterRejected(
            RejectionReason.INELIGIBLE_POSITION,
            f"{player.name} cannot play as {assignment.assigned_position.value}. "
            f"Valid positions: {_format_positions(valid)}",
            {
                "player_id": player.player_id,
                "player_name": player.name,
                "assigned_position": assignment.assigned_position.value,
                "valid_positions": [position.value for position in valid],
            },
        )
    return None


def _check_captain_name(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    captain = resolved.player(resolved.selection.captain_id)
    if _normalize_name(captain.name) == _normalize_name(resolved.owner_full_name):
        return RosterRejected(
            RejectionReason.CAPTAIN_SHARES_OWNER_NAME,
            f"You cannot captain {captain.name} because they share your name. "
            "Choose a different captain.",
            {"player_id": captain.player_id, "player_name": captain.name},
        )
    return None


def _check_marquee_cap(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    marquee = [
        player_id for player_id in resolved.selection.all_player_ids if resolved.player(player_id).is_marquee
    ]
    cap = resolved.rules.marquee_cap
    if len(marquee) > cap:
        return RosterRejected(
            RejectionReason.TOO_MANY_MARQUEE,
            f"Maximum {cap} marquee players allowed per team (starters + bench combined)",
            {"count": len(marquee), "cap": cap, "player_ids": sorted(marquee)},
        )
    return None


def _check_budget(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    total = sum(
        (resolved.player(player_id).price for player_id in resolved.selection.all_player_ids),
        Decimal("0"),
    )
    ceiling = resolved.rules.budget_ceiling
    if total > ceiling:
        return RosterRejected(
            RejectionReason.OVER_BUDGET,
            f"Team cost ${total} exceeds the ${ceiling} budget. Remove expensive players to fit the budget.",
            {"total": str(total), "ceiling": str(ceiling)},
        )
    return None


def _check_bench(resolved: _ResolvedRoster) -> Optional[RosterRejected]:
    goalkeepers = [
        player_id
        for player_id in resolved.selection.bench_player_ids
        if resolved.player(player_id).position == Position.GK
    ]
    expected = resolved.rules.bench_goalkeepers
    if len(goalkeepers) != expected:
        return RosterRejected(
            RejectionReason.INVALID_BENCH,
            f"Bench must include exactly {expected} goalkeeper (GK) and "
            f"{resolved.rules.bench_count - expected} outfield players",
            {"goalkeepers": len(goalkeepers), "expected": expected},
        )
    return None


_STRUCTURAL_CHECKS: tuple[_StructuralCheck, ...] = (
    _check_size,
    _check_duplicates,
    _check_captain_starts,
)

_CATALOG_CHECKS: tuple[_CatalogCheck, ...] = (
    _check_formation,
    _check_eligibility,
    _check_captain_name,
    _check_marquee_cap,
    _check_budget,
    _check_bench,
)


def _resolve_players(
    selection: RosterSelection, catalog: PlayerCatalog
) -> Mapping[str, PlayerRecord] | RosterRejected:
    players: dict[str, PlayerRecord] = {}
    for player_id in selection.all_player_ids:
        record = catalog.get(player_id)
        if record is None:
            return RosterRejected(
                RejectionReason.UNKNOWN_PLAYER,
                f"Player {player_id} does not exist",
                {"player_id": player_id},
            )
        players[player_id] = record
    return players


def validate_roster(
    selection: RosterSelection,
    *,
    owner_id: str,
    owner_full_name: str,
    catalog: PlayerCatalog,
    rules: SquadRules = DEFAULT_RULES,
) -> ValidationOutcome:
    """Check ``selection`` against every squad rule, stopping at the first failure."""

    for structural_check in _STRUCTURAL_CHECKS:
        rejection = structural_check(selection, rules)
        if rejection is not None:
            return _rejected(owner_id, rejection)

    players = _resolve_players(selection, catalog)
    if isinstance(players, RosterRejected):
        return _rejected(owner_id, players)

    resolved = _ResolvedRoster(
        selection=selection,
        players=players,
        owner_full_name=owner_full_name,
        rules=rules,
    )
    for catalog_check in _CATALOG_CHECKS:
        rejection = catalog_check(resolved)
        if rejection is not None:
            return _rejected(owner_id, rejection)

    return RosterAccepted(
        ValidatedRoster(
            owner_id=owner_id,
            captain_id=selection.captain_id,
            starters=selection.starters,
            bench_player_ids=selection.bench_player_ids,
        )
    )


def _rejected(owner_id: str, rejection: RosterRejected) -> RosterRejected:
    logger.info("Roster for %s rejected (%s): %s", owner_id, rejection.reason.value, rejection.detail)
    return rejection
