from decimal import Decimal

import pytest
from pydantic import ValidationError

from mrrfantasy.models import PlayerRecord, Position, can_play, eligible_positions


def _record(**overrides):
    values = dict(player_id="p1", name="Test Player", position=Position.MID, price=Decimal("6.5"))
    values.update(overrides)
    return PlayerRecord(**values)


def test_player_record_is_frozen():
    record = _record()

    assert record.player_id == "p1"
    assert record.total_points == 0

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[attr-defined]


def test_price_must_not_be_negative():
    with pytest.raises(ValidationError):
        _record(price=Decimal("-1"))


def test_secondary_position_widens_eligibility():
    record = _record(secondary_position=Position.FWD)

    assert eligible_positions(record) == (Position.MID, Position.FWD)
    assert can_play(record, Position.FWD)
    assert not can_play(record, Position.GK)


def test_secondary_matching_primary_is_dropped():
    record = _record(secondary_position=Position.MID)

    assert record.secondary_position is None
    assert eligible_positions(record) == (Position.MID,)


def test_position_accepts_string_values():
    record = _record(position="GK")
    assert record.position is Position.GK
