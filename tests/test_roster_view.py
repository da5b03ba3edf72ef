import logging

from mrrfantasy.catalog import InMemoryCatalog
from mrrfantasy.models import Position, StoredRoster
from mrrfantasy.roster import materialize, points_breakdown

from tests.sample_data import DEFAULT_BENCH, DEFAULT_STARTERS, sample_players, starters


def _stored(**overrides):
    values = dict(
        owner_id="user-1",
        team_name="Kathmandu Kickers",
        captain_id="fwd1",
        starters=starters(*DEFAULT_STARTERS),
        bench_player_ids=DEFAULT_BENCH,
        generation=1,
    )
    values.update(overrides)
    return StoredRoster(**values)


def test_materialize_totals_only_starters():
    display = materialize(_stored(), InMemoryCatalog(sample_players()))

    assert display.total_points == 10 + 20 + 15 + 5 + 40 + 30
    assert [view.player.player_id for view in display.starters] == ["gk1", "def1", "mid1", "mid2", "fwd1", "fwd2"]
    assert [player.player_id for player in display.bench] == ["gk2", "def2", "fwd3"]
    assert display.starters[0].assigned_position is Position.GK


def test_materialize_reflects_latest_catalog_points():
    players = [
        player.model_copy(update={"total_points": 100}) if player.player_id == "mid2" else player
        for player in sample_players()
    ]
    display = materialize(_stored(), InMemoryCatalog(players))
    assert display.total_points == 10 + 20 + 15 + 100 + 40 + 30


def test_materialize_empty_roster():
    display = materialize(StoredRoster(owner_id="user-2", team_name="Fresh"), InMemoryCatalog(sample_players()))

    assert display.starters == ()
    assert display.bench == ()
    assert display.total_points == 0
    assert display.captain_id is None


def test_materialize_skips_players_missing_from_catalog(caplog):
    catalog = InMemoryCatalog(player for player in sample_players() if player.player_id != "fwd2")

    with caplog.at_level(logging.WARNING):
        display = materialize(_stored(), catalog)

    assert len(display.starters) == 5
    assert display.total_points == 10 + 20 + 15 + 5 + 40
    assert "fwd2" in caplog.text


def test_points_breakdown_shape():
    breakdown = points_breakdown(materialize(_stored(), InMemoryCatalog(sample_players())))

    assert breakdown["owner_id"] == "user-1"
    assert breakdown["captain_id"] == "fwd1"
    assert breakdown["total_points"] == 120
    assert breakdown["starters"][4] == {
        "player_id": "fwd1",
        "name": "Aashish Striker",
        "assigned_position": "FWD",
        "total_points": 40,
    }
    assert breakdown["bench"][0] == {
        "player_id": "gk2",
        "name": "Himal Reserve",
        "position": "GK",
        "total_points": 3,
    }
