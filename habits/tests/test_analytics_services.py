import pytest

from habits.services import analytics
from habits.services.analytics import HabitMonth


def _habit(id, name, days=()):
    return HabitMonth(id=id, name=name, completed_days=frozenset(days))


def test_days_in_month__uses_calendar_lengths():
    assert analytics.days_in_month(0, 2026) == 31
    assert analytics.days_in_month(3, 2026) == 30
    assert analytics.days_in_month(11, 2026) == 31


def test_days_in_month__february_follows_leap_years():
    assert analytics.days_in_month(1, 2026) == 28
    assert analytics.days_in_month(1, 2028) == 29
    assert analytics.days_in_month(1, 2100) == 28


def test_days_in_month__rejects_out_of_range_month():
    with pytest.raises(ValueError):
        analytics.days_in_month(12, 2026)


def test_compute_month_analytics__example_month():
    habits = [_habit(1, "Run"), _habit(2, "Read", [5])]

    result = analytics.compute_month_analytics(habits, 31)

    assert result.total_checks == 1
    assert result.completion_rate == 2  # round(100 * 1 / 62)
    assert result.best_habit.name == "Read"
    assert result.most_productive_day == 5
    assert len(result.daily_counts) == 31
    assert result.daily_counts[4] == 1
    assert sum(result.daily_counts) == 1


def test_compute_month_analytics__empty_snapshot():
    result = analytics.compute_month_analytics([], 30)

    assert result.completion_rate == 0
    assert result.total_checks == 0
    assert result.best_habit is None
    assert result.daily_counts == (0,) * 30
    assert result.most_productive_day == 1


def test_compute_month_analytics__zero_length_month_has_zero_rate():
    result = analytics.compute_month_analytics([_habit(1, "Run", [1])], 0)

    assert result.completion_rate == 0
    assert result.daily_counts == ()
    assert result.most_productive_day == 1


def test_completion_rate__rounds_half_up():
    # 1 check of 8 possible = 12.5% -> 13
    assert analytics.round_half_up_percent(1, 8) == 13
    # 1 of 200 = 0.5% -> 1
    assert analytics.round_half_up_percent(1, 200) == 1
    # 1 of 3 = 33.33% -> 33
    assert analytics.round_half_up_percent(1, 3) == 33
    assert analytics.round_half_up_percent(5, 5) == 100


def test_best_habit__first_max_wins_ties():
    habits = [
        _habit(1, "Run", [1, 2]),
        _habit(2, "Read", [3, 4]),
        _habit(3, "Walk", [5]),
    ]
    assert analytics.best_habit(habits).name == "Run"


def test_best_habit__all_empty_returns_first():
    habits = [_habit(1, "Run"), _habit(2, "Read")]
    assert analytics.best_habit(habits).name == "Run"


def test_most_productive_day__lowest_day_wins_ties():
    habits = [
        _habit(1, "Run", [3, 7]),
        _habit(2, "Read", [7, 3, 9]),
    ]
    result = analytics.compute_month_analytics(habits, 31)

    assert result.daily_counts[2] == 2
    assert result.daily_counts[6] == 2
    assert result.most_productive_day == 3


def test_daily_counts__ignores_days_beyond_month_length():
    habits = [_habit(1, "Run", [28, 30, 31])]

    counts = analytics.daily_counts(habits, 28)

    assert len(counts) == 28
    assert counts[27] == 1
    assert sum(counts) == 1


def test_compute_month_analytics__is_deterministic():
    habits = [
        _habit(1, "Run", [1, 2, 3]),
        _habit(2, "Read", [2, 3]),
        _habit(3, "Walk", [3, 20]),
    ]

    first = analytics.compute_month_analytics(habits, 30)
    second = analytics.compute_month_analytics(list(habits), 30)

    assert first == second
    assert first.completion_rate == 8  # 7 / 90
    assert first.most_productive_day == 3


def test_analyze_month__uses_month_length():
    result = analytics.analyze_month([_habit(1, "Run", [29])], 1, 2028)

    assert result.days_in_month == 29
    assert result.daily_counts[28] == 1
    assert result.completion_rate == 3  # 1 / 29 = 3.4%


def test_habit_month__with_day_toggled_flips_membership():
    habit = _habit(1, "Run", [5])

    assert habit.with_day_toggled(5).completed_days == frozenset()
    assert habit.with_day_toggled(6).completed_days == frozenset({5, 6})
    assert habit.completed_days == frozenset({5})


def test_habit_rates__share_of_month_per_habit_in_input_order():
    habits = [
        _habit(1, "Run", range(1, 16)),  # 15 / 30 = 50%
        _habit(2, "Read", [1]),  # 1 / 30 = 3.33%
        _habit(3, "Walk"),
    ]

    result = analytics.compute_month_analytics(habits, 30)

    assert [(r.habit.name, r.completion_rate) for r in result.habit_rates] == [
        ("Run", 50),
        ("Read", 3),
        ("Walk", 0),
    ]


def test_habit_completion_rate__rounds_half_up():
    # 1 of 200 days is exactly 0.5%
    assert analytics.habit_completion_rate(_habit(1, "Run", [1]), 200) == 1
    assert analytics.habit_completion_rate(_habit(1, "Run", range(1, 32)), 31) == 100


def test_habit_rates__zero_length_month_is_zero():
    result = analytics.compute_month_analytics([_habit(1, "Run", [1, 2])], 0)

    assert result.habit_rates[0].completion_rate == 0
    assert analytics.habit_completion_rate(_habit(2, "Read", [3]), 0) == 0


def test_habit_rates__empty_snapshot():
    assert analytics.compute_month_analytics([], 31).habit_rates == ()


def test_month_names__fixed_english_names():
    assert analytics.MONTH_NAMES[0] == "January"
    assert analytics.MONTH_NAMES[1] == "February"
    assert len(analytics.MONTH_NAMES) == 12
