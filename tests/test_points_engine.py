import pytest

from mrrfantasy.models import Position, WeeklyPerformance
from mrrfantasy.scoring import score, score_performance


def test_forward_goals_and_assist():
    assert score(Position.FWD, goals=2, assists=1) == 25


def test_midfielder_goal_assists_and_tackle():
    assert score(Position.MID, goals=1, assists=2, tackles=1) == 20


def test_goalkeeper_goal_clean_sheet_and_saves():
    assert score(Position.GK, goals=1, clean_sheets=1, saves=3) == 24


@pytest.mark.parametrize("position", list(Position))
def test_empty_week_scores_zero(position):
    assert score(position) == 0


@pytest.mark.parametrize(
    "position, expected",
    [
        (Position.FWD, 10),
        (Position.MID, 8),
        (Position.DEF, 12),
        (Position.GK, 12),
    ],
)
def test_goal_weight_depends_on_position(position, expected):
    assert score(position, goals=1) == expected


@pytest.mark.parametrize("position", [Position.MID, Position.FWD])
def test_clean_sheets_and_saves_ignored_for_attackers(position):
    assert score(position, clean_sheets=3, saves=7) == 0


def test_saves_only_count_for_goalkeepers():
    assert score(Position.DEF, saves=4) == 0
    assert score(Position.GK, saves=4) == 8
    assert score(Position.DEF, clean_sheets=1) == 6


@pytest.mark.parametrize("position", list(Position))
@pytest.mark.parametrize("counter", ["goals", "assists", "clean_sheets", "saves", "tackles"])
def test_more_of_any_counter_never_lowers_points(position, counter):
    base = {"goals": 1, "assists": 1, "clean_sheets": 1, "saves": 1, "tackles": 1}
    bumped = dict(base, **{counter: base[counter] + 1})
    assert score(position, **bumped) >= score(position, **base)


def test_score_performance_uses_weekly_counters():
    performance = WeeklyPerformance(player_id="fwd1", week_number=3, goals=2, assists=1)
    assert score_performance(Position.FWD, performance) == 25
    assert score_performance(Position.MID, performance) == 21


def test_weekly_performance_rejects_negative_counters():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        WeeklyPerformance(player_id="fwd1", week_number=1, goals=-1)
    with pytest.raises(ValidationError):
        WeeklyPerformance(player_id="fwd1", week_number=0)
