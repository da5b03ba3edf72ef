"""Squad rules for supported competition formats."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable

from mrrfantasy.models.player import Position


@dataclass(frozen=True)
class SquadRules:
    name: str
    starter_count: int
    bench_count: int
    budget_ceiling: Decimal
    marquee_cap: int
    starting_goalkeepers: int
    min_outfield_per_position: int
    bench_goalkeepers: int

    @property
    def squad_size(self) -> int:
        return self.starter_count + self.bench_count


OUTFIELD_POSITIONS = (Position.DEF, Position.MID, Position.FWD)


_SQUAD_RULES: Dict[str, SquadRules] = {
    "default": SquadRules(
        name="default",
        starter_count=6,
        bench_count=3,
        budget_ceiling=Decimal("70"),
        marquee_cap=2,
        starting_goalkeepers=1,
        min_outfield_per_position=1,
        bench_goalkeepers=1,
    ),
}

DEFAULT_RULES = _SQUAD_RULES["default"]


def iter_rules() -> Iterable[SquadRules]:
    """Return an iterator of all configured rule sets."""

    return _SQUAD_RULES.values()


def get_rules(name: str = "default") -> SquadRules:
    """Fetch a rule set by name, raising KeyError if missing."""

    key = name.strip().lower()
    if key not in _SQUAD_RULES:
        raise KeyError(f"No squad rules configured for {name!r}")
    return _SQUAD_RULES[key]
