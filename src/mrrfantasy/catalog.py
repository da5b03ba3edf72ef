"""Read-only player catalog interface used by validation and aggregation."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Protocol

from mrrfantasy.models import PlayerRecord


class PlayerCatalog(Protocol):
    def get(self, player_id: str) -> Optional[PlayerRecord]:
        ...


class InMemoryCatalog:
    """Snapshot of player records keyed by id."""

    def __init__(self, records: Iterable[PlayerRecord] = ()):
        self._records: Dict[str, PlayerRecord] = {record.player_id: record for record in records}

    def get(self, player_id: str) -> Optional[PlayerRecord]:
        return self._records.get(player_id)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._records

    def __iter__(self) -> Iterator[PlayerRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
