import logging
from typing import List, Set

from django.db import IntegrityError
from django.db.models import Prefetch

from habits.exceptions import NotFoundError, ValidationError
from habits.services.analytics import HabitMonth
from habits.store import HabitStore

logger = logging.getLogger(__name__)

ADDED = "added"
REMOVED = "removed"


def coerce_int(value, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer, got {value!r}") from None


def coerce_id(value, field_name: str) -> int:
    """Database ids arrive as strings from GraphQL; anything non-numeric is bad input."""
    return coerce_int(value, field_name)


def validate_period(month, year):
    if not 0 <= coerce_int(month, "month") <= 11:
        raise ValidationError(f"month must be within 0..11, got {month!r}")
    if coerce_int(year, "year") < 1:
        raise ValidationError(f"year must be positive, got {year!r}")


def validate_day(day):
    if not 1 <= coerce_int(day, "day") <= 31:
        raise ValidationError(f"day must be within 1..31, got {day!r}")


class CompletionLedger:
    """
    Per-day completion marks. A mark exists or it doesn't; the only write
    is `toggle`, which flips it.
    """

    def __init__(self, store: HabitStore):
        self.store = store

    def toggle(self, habit_id, day, month, year) -> str:
        """
        Flip the completion of `habit_id` on the given day.

        Returns "added" when the day became completed and "removed" when it
        was cleared. Two identical calls cancel each other out, so callers
        must not retry a toggle blindly.
        """
        habit_id = coerce_id(habit_id, "habit_id")
        validate_day(day)
        validate_period(month, year)
        key = dict(habit_id=habit_id, day=int(day), month=int(month), year=int(year))

        with self.store.transaction():
            if not self.store.habits().filter(pk=habit_id).exists():
                raise NotFoundError(f"habit {habit_id} does not exist")

            existing = (
                self.store.completions()
                .select_for_update()
                .filter(**key)
                .values_list("pk", flat=True)
                .first()
            )
            if existing is not None:
                self.store.completions().filter(pk=existing).delete()
                logger.debug("Completion removed %s", key)
                return REMOVED

            try:
                with self.store.atomic():
                    self.store.completions().create(**key)
            except IntegrityError:
                # A concurrent toggle inserted the same day first.
                logger.info("Completion already present for %s, treating as added", key)
                return ADDED

        logger.debug("Completion added %s", key)
        return ADDED

    def completions_for(self, habit_id, month, year) -> Set[int]:
        habit_id = coerce_id(habit_id, "habit_id")
        validate_period(month, year)
        with self.store.transaction():
            return set(
                self.store.completions()
                .filter(habit_id=habit_id, month=int(month), year=int(year))
                .values_list("day", flat=True)
            )

    def month_snapshot(self, user_id, month, year) -> List[HabitMonth]:
        """
        The user's active habits in creation order, each with the days
        completed in `month`/`year`. Unknown users get an empty list.
        """
        user_id = coerce_id(user_id, "user_id")
        validate_period(month, year)
        month_completions = Prefetch(
            "completions",
            queryset=self.store.completions().filter(month=int(month), year=int(year)).only("habit", "day"),
            to_attr="month_completions",
        )

        with self.store.transaction():
            habits = list(
                self.store.habits()
                .filter(owner_id=user_id, archived=False)
                .order_by("id")
                .prefetch_related(month_completions)
            )

        return [
            HabitMonth(
                id=habit.pk,
                name=habit.name,
                completed_days=frozenset(c.day for c in habit.month_completions),
            )
            for habit in habits
        ]
