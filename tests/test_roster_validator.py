from decimal import Decimal

import pytest

from mrrfantasy.catalog import InMemoryCatalog
from mrrfantasy.models import Position
from mrrfantasy.roster import RejectionReason, RosterAccepted, RosterRejected, validate_roster

from tests.sample_data import DEFAULT_STARTERS, OWNER_ID, OWNER_NAME, sample_players, valid_selection


def _catalog(**price_overrides):
    players = []
    for player in sample_players():
        if player.player_id in price_overrides:
            player = player.model_copy(update={"price": Decimal(price_overrides[player.player_id])})
        players.append(player)
    return InMemoryCatalog(players)


def _validate(selection, *, catalog=None, owner_name=OWNER_NAME):
    return validate_roster(
        selection,
        owner_id=OWNER_ID,
        owner_full_name=owner_name,
        catalog=catalog or _catalog(),
    )


def _assert_rejected(outcome, reason):
    assert isinstance(outcome, RosterRejected), outcome
    assert not outcome.ok
    assert outcome.reason is reason
    return outcome


def test_valid_roster_is_accepted():
    outcome = _validate(valid_selection())

    assert isinstance(outcome, RosterAccepted)
    assert outcome.ok
    assert outcome.roster.owner_id == OWNER_ID
    assert outcome.roster.captain_id == "fwd1"
    assert [item.player_id for item in outcome.roster.starters] == ["gk1", "def1", "mid1", "mid2", "fwd1", "fwd2"]
    assert outcome.roster.bench_player_ids == ("gk2", "def2", "fwd3")


def test_seven_starters_is_wrong_size():
    selection = valid_selection(
        starter_pairs=DEFAULT_STARTERS + (("def2", Position.DEF),),
        bench=("gk2", "fwd3"),
    )
    outcome = _assert_rejected(_validate(selection), RejectionReason.WRONG_ROSTER_SIZE)
    assert outcome.context["starters"] == 7


def test_two_bench_players_is_wrong_size():
    outcome = _assert_rejected(_validate(valid_selection(bench=("gk2", "def2"))), RejectionReason.WRONG_ROSTER_SIZE)
    assert outcome.context["bench"] == 2


def test_player_on_starters_and_bench_is_duplicate():
    outcome = _assert_rejected(
        _validate(valid_selection(bench=("gk2", "def1", "fwd3"))),
        RejectionReason.DUPLICATE_PLAYER,
    )
    assert outcome.context["player_ids"] == ["def1"]


def test_captain_on_bench_must_start():
    _assert_rejected(_validate(valid_selection(captain_id="gk2")), RejectionReason.CAPTAIN_NOT_STARTER)


def test_unknown_player_is_rejected():
    outcome = _assert_rejected(
        _validate(valid_selection(bench=("gk2", "ghost", "fwd3"))),
        RejectionReason.UNKNOWN_PLAYER,
    )
    assert outcome.context["player_id"] == "ghost"


def test_two_starting_goalkeepers_is_invalid_formation():
    starters = (
        ("gk1", Position.GK),
        ("gk3", Position.GK),
        ("mid1", Position.MID),
        ("mid2", Position.MID),
        ("fwd1", Position.FWD),
        ("fwd2", Position.FWD),
    )
    outcome = _assert_rejected(
        _validate(valid_selection(starter_pairs=starters, bench=("gk2", "def1", "fwd3"))),
        RejectionReason.INVALID_FORMATION,
    )
    assert outcome.context == {"position": "GK", "expected": 1, "found": 2}


def test_missing_forward_is_invalid_formation():
    starters = (
        ("gk1", Position.GK),
        ("def1", Position.DEF),
        ("mid1", Position.MID),
        ("mid2", Position.MID),
        ("fwd1", Position.MID),
        ("def2", Position.DEF),
    )
    outcome = _assert_rejected(
        _validate(valid_selection(starter_pairs=starters, bench=("gk2", "fwd2", "fwd3"))),
        RejectionReason.INVALID_FORMATION,
    )
    assert outcome.context["position"] == "FWD"
    assert outcome.context["found"] == 0


def test_player_out_of_position_names_valid_positions():
    starters = (
        ("gk1", Position.GK),
        ("def1", Position.DEF),
        ("mid1", Position.MID),
        ("mid2", Position.FWD),
        ("fwd1", Position.FWD),
        ("fwd2", Position.FWD),
    )
    outcome = _assert_rejected(
        _validate(valid_selection(starter_pairs=starters)),
        RejectionReason.INELIGIBLE_POSITION,
    )
    assert outcome.detail.startswith("Subin Mover cannot play as FWD")
    assert outcome.context["valid_positions"] == ["MID"]


def test_secondary_position_is_eligible():
    starters = (
        ("gk1", Position.GK),
        ("mid1", Position.DEF),
        ("def1", Position.DEF),
        ("fwd1", Position.MID),
        ("mid2", Position.MID),
        ("fwd2", Position.FWD),
    )
    outcome = _validate(valid_selection(starter_pairs=starters))
    assert isinstance(outcome, RosterAccepted)


def test_captain_sharing_owner_name_is_rejected_case_insensitively():
    starters = (
        ("gk1", Position.GK),
        ("def1", Position.DEF),
        ("mid3", Position.MID),
        ("mid2", Position.MID),
        ("fwd1", Position.FWD),
        ("fwd2", Position.FWD),
    )
    selection = valid_selection(starter_pairs=starters, captain_id="mid3")

    outcome = _assert_rejected(
        _validate(selection, owner_name="  tEST owner "),
        RejectionReason.CAPTAIN_SHARES_OWNER_NAME,
    )
    assert outcome.context["player_id"] == "mid3"

    # Same player is fine as a non-captain starter.
    assert _validate(valid_selection(starter_pairs=starters, captain_id="fwd1")).ok


def test_third_marquee_player_is_rejected():
    outcome = _assert_rejected(
        _validate(valid_selection(bench=("gk2", "def2", "fwd4"))),
        RejectionReason.TOO_MANY_MARQUEE,
    )
    assert outcome.context["count"] == 3
    assert outcome.context["cap"] == 2


def test_budget_ceiling_is_inclusive():
    assert _validate(valid_selection(), catalog=_catalog(fwd3="12")).ok

    outcome = _assert_rejected(
        _validate(valid_selection(), catalog=_catalog(fwd3="13")),
        RejectionReason.OVER_BUDGET,
    )
    assert outcome.context == {"total": "71", "ceiling": "70"}
    assert "$71" in outcome.detail


def test_fractional_prices_are_summed_exactly():
    catalog = _catalog(gk1="8.1", def1="7.2", fwd3="4.7")
    assert _validate(valid_selection(), catalog=catalog).ok

    catalog = _catalog(gk1="8.1", def1="7.2", fwd3="11.71")
    outcome = _assert_rejected(_validate(valid_selection(), catalog=catalog), RejectionReason.OVER_BUDGET)
    assert outcome.context["total"] == "70.01"


def test_bench_needs_exactly_one_goalkeeper():
    _assert_rejected(_validate(valid_selection(bench=("gk2", "gk3", "fwd3"))), RejectionReason.INVALID_BENCH)
    _assert_rejected(_validate(valid_selection(bench=("mid3", "def2", "fwd3"))), RejectionReason.INVALID_BENCH)


def test_first_failing_check_wins():
    # Wrong size beats unknown player.
    selection = valid_selection(bench=("ghost", "fwd3"))
    _assert_rejected(_validate(selection), RejectionReason.WRONG_ROSTER_SIZE)

    # Marquee cap is checked before the budget.
    selection = valid_selection(bench=("gk2", "def2", "fwd4"))
    _assert_rejected(_validate(selection, catalog=_catalog(gk1="40")), RejectionReason.TOO_MANY_MARQUEE)

    # Budget is checked before bench composition.
    selection = valid_selection(bench=("gk2", "gk3", "fwd3"))
    _assert_rejected(_validate(selection, catalog=_catalog(gk3="20")), RejectionReason.OVER_BUDGET)


@pytest.mark.parametrize(
    "bench",
    [
        ("gk2", "def2", "fwd3"),
        ("fwd3", "gk2", "def2"),
        ("def2", "fwd3", "gk2"),
    ],
)
def test_verdict_does_not_depend_on_ordering(bench):
    starters = tuple(reversed(DEFAULT_STARTERS))
    assert _validate(valid_selection(starter_pairs=starters, bench=bench)).ok

    over = _validate(valid_selection(starter_pairs=starters, bench=bench), catalog=_catalog(fwd3="13"))
    _assert_rejected(over, RejectionReason.OVER_BUDGET)
