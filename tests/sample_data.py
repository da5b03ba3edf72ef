"""Shared player pool and roster builders for the test suite."""

from __future__ import annotations

from decimal import Decimal

from mrrfantasy.models import PlayerRecord, Position, RosterSelection, StarterAssignment


OWNER_ID = "user-1"
OWNER_NAME = "Test Owner"


def _player(player_id, name, position, price, *, secondary=None, marquee=False, points=0):
    return PlayerRecord(
        player_id=player_id,
        name=name,
        position=position,
        secondary_position=secondary,
        is_marquee=marquee,
        price=Decimal(price),
        total_points=points,
        team_name="MRR Fantasy",
    )


def sample_players() -> list[PlayerRecord]:
    return [
        _player("gk1", "Anod Keeper", Position.GK, "8", points=10),
        _player("def1", "Kishor Back", Position.DEF, "7", points=20),
        _player("mid1", "Parbat Middle", Position.MID, "7", secondary=Position.DEF, points=15),
        _player("mid2", "Subin Mover", Position.MID, "6", points=5),
        _player("fwd1", "Aashish Striker", Position.FWD, "10", secondary=Position.MID, marquee=True, points=40),
        _player("fwd2", "Dip Finisher", Position.FWD, "10", marquee=True, points=30),
        _player("gk2", "Himal Reserve", Position.GK, "5", points=3),
        _player("def2", "Sumit Cover", Position.DEF, "5", points=2),
        _player("fwd3", "Kaushal Spare", Position.FWD, "5", points=1),
        # Extras used to break individual rules.
        _player("fwd4", "Rajeev Star", Position.FWD, "4", marquee=True),
        _player("gk3", "Nitesh Dual", Position.GK, "4", secondary=Position.DEF),
        _player("def4", "Kishor Pricey", Position.DEF, "13"),
        _player("mid3", "Test Owner", Position.MID, "6"),
    ]


def starters(*pairs: tuple[str, Position]) -> tuple[StarterAssignment, ...]:
    return tuple(StarterAssignment(player_id=player_id, assigned_position=position) for player_id, position in pairs)


DEFAULT_STARTERS = (
    ("gk1", Position.GK),
    ("def1", Position.DEF),
    ("mid1", Position.MID),
    ("mid2", Position.MID),
    ("fwd1", Position.FWD),
    ("fwd2", Position.FWD),
)
DEFAULT_BENCH = ("gk2", "def2", "fwd3")


def valid_selection(
    *,
    starter_pairs=DEFAULT_STARTERS,
    bench=DEFAULT_BENCH,
    captain_id: str = "fwd1",
) -> RosterSelection:
    return RosterSelection.build(starters(*starter_pairs), bench, captain_id)


def selection_payload(selection: RosterSelection) -> dict:
    return {
        "starters": [
            {"player_id": item.player_id, "assigned_position": item.assigned_position.value}
            for item in selection.starters
        ],
        "bench_player_ids": list(selection.bench_player_ids),
        "captain_id": selection.captain_id,
    }
