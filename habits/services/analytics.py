import calendar
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Sequence, Tuple


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class HabitMonth:
    """A habit together with the days it was completed in one month."""
    id: int
    name: str
    completed_days: FrozenSet[int] = field(default_factory=frozenset)

    def with_day_toggled(self, day: int) -> "HabitMonth":
        return HabitMonth(
            id=self.id,
            name=self.name,
            completed_days=self.completed_days ^ {day},
        )


@dataclass(frozen=True)
class HabitRate:
    habit: HabitMonth
    completion_rate: int


@dataclass(frozen=True)
class MonthAnalytics:
    days_in_month: int
    total_checks: int
    completion_rate: int
    best_habit: Optional[HabitMonth]
    daily_counts: Tuple[int, ...]
    most_productive_day: int
    habit_rates: Tuple[HabitRate, ...] = ()


def days_in_month(month: int, year: int) -> int:
    """
    Calendar length of a 0-indexed month (January == 0).
    February follows the leap-year rule.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be within 0..11, got {month}")
    return calendar.monthrange(year, month + 1)[1]


def round_half_up_percent(part: int, whole: int) -> int:
    """
    round(100 * part / whole) with halves rounded up, in exact integer math.
    floor(100p/w + 1/2) == (200p + w) // 2w
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def best_habit(habits: Sequence[HabitMonth]) -> Optional[HabitMonth]:
    # First max wins on ties.
    best = None
    best_count = -1
    for habit in habits:
        count = len(habit.completed_days)
        if count > best_count:
            best, best_count = habit, count
    return best


def habit_completion_rate(habit: HabitMonth, month_length: int) -> int:
    return round_half_up_percent(len(habit.completed_days), month_length)


def habit_rates(habits: Sequence[HabitMonth], month_length: int) -> Tuple[HabitRate, ...]:
    return tuple(
        HabitRate(habit=h, completion_rate=habit_completion_rate(h, month_length))
        for h in habits
    )


def daily_counts(habits: Sequence[HabitMonth], month_length: int) -> Tuple[int, ...]:
    counts = [0] * month_length
    for habit in habits:
        for day in habit.completed_days:
            if 1 <= day <= month_length:
                counts[day - 1] += 1
    return tuple(counts)


def most_productive_day(counts: Sequence[int]) -> int:
    """1-based day with the highest count, lowest day on ties. Day 1 when empty."""
    best_day = 1
    best_count = None
    for index, count in enumerate(counts):
        if best_count is None or count > best_count:
            best_day, best_count = index + 1, count
    return best_day


def compute_month_analytics(habits: Sequence[HabitMonth], month_length: int) -> MonthAnalytics:
    """
    Derives the monthly dashboard figures from a month snapshot.

    - total_checks: completed days summed across habits
    - completion_rate: share of possible checks, integer percent
    - best_habit: habit with the most completed days
    - daily_counts: habits completed per day, index 0 is day 1
    - most_productive_day: busiest day number
    - habit_rates: each habit's share of the month's days, input order
    """
    habits = list(habits)
    total = sum(len(h.completed_days) for h in habits)
    counts = daily_counts(habits, month_length)

    return MonthAnalytics(
        days_in_month=month_length,
        total_checks=total,
        completion_rate=round_half_up_percent(total, len(habits) * month_length),
        best_habit=best_habit(habits),
        daily_counts=counts,
        most_productive_day=most_productive_day(counts),
        habit_rates=habit_rates(habits, month_length),
    )


def analyze_month(habits: Sequence[HabitMonth], month: int, year: int) -> MonthAnalytics:
    return compute_month_analytics(habits, days_in_month(month, year))
