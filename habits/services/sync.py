import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from django.utils import timezone

from habits.exceptions import ValidationError
from habits.services.analytics import MONTH_NAMES, HabitMonth, MonthAnalytics, analyze_month
from habits.services.ledger import ADDED, CompletionLedger
from habits.services.registry import HabitRegistry
from habits.store import HabitStore

logger = logging.getLogger(__name__)


class HabitBackend(ABC):
    """Request/response operations a session talks to."""

    @abstractmethod
    def login(self, username):
        ...

    @abstractmethod
    def fetch_month(self, user_id, month: int, year: int) -> List[HabitMonth]:
        ...

    @abstractmethod
    def create_habit(self, user_id, name: str) -> HabitMonth:
        ...

    @abstractmethod
    def delete_habit(self, habit_id) -> bool:
        ...

    @abstractmethod
    def toggle_day(self, habit_id, day: int, month: int, year: int) -> str:
        ...


class ServiceBackend(HabitBackend):
    """Calls the registry and ledger in-process, one store per call."""

    def __init__(self, using: str = "default"):
        self.using = using

    def _store(self) -> HabitStore:
        return HabitStore(using=self.using)

    def login(self, username):
        with self._store() as store:
            return HabitRegistry(store).resolve_user(username)

    def fetch_month(self, user_id, month, year):
        with self._store() as store:
            return CompletionLedger(store).month_snapshot(user_id, month, year)

    def create_habit(self, user_id, name):
        with self._store() as store:
            return HabitRegistry(store).create_habit(user_id, name)

    def delete_habit(self, habit_id):
        with self._store() as store:
            return HabitRegistry(store).delete_habit(habit_id)

    def toggle_day(self, habit_id, day, month, year):
        with self._store() as store:
            return CompletionLedger(store).toggle(habit_id, day, month, year)


class HabitTrackerSession:
    """
    Client-side view of one user's month.

    Toggles and deletes are applied to the local snapshot before the backend
    answers. Creation waits for the backend so only server ids are shown.
    Login and month changes throw the local snapshot away and refetch it.

    A failed toggle or delete is logged, kept on `last_error` and re-raised.
    The local change stays in place, so the snapshot may disagree with the
    server until the next refresh. Pass `revert_on_failure=True` to undo a
    failed toggle locally instead; deletes are never rolled back.
    """

    def __init__(self, backend: HabitBackend, month: Optional[int] = None,
                 year: Optional[int] = None, revert_on_failure: bool = False):
        today = timezone.localdate()
        self.backend = backend
        self.month = today.month - 1 if month is None else month
        self.year = today.year if year is None else year
        self.revert_on_failure = revert_on_failure
        self.user = None
        self.habits: List[HabitMonth] = []
        self.last_error: Optional[Exception] = None

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month]

    @property
    def analytics(self) -> MonthAnalytics:
        return analyze_month(self.habits, self.month, self.year)

    def completed_days(self, habit_id) -> frozenset:
        habit = self._find(habit_id)
        return habit.completed_days if habit else frozenset()

    def login(self, username):
        self.user = self.backend.login(username)
        self.refresh()
        return self.user

    def logout(self):
        self.user = None
        self.habits = []

    def refresh(self) -> List[HabitMonth]:
        """Replace the local snapshot with the server's, last fetch wins."""
        if self.user is None:
            self.habits = []
            return self.habits
        self.habits = list(self.backend.fetch_month(self.user.pk, self.month, self.year))
        return self.habits

    def set_month(self, month: int):
        month = min(max(month, 0), 11)
        if month != self.month:
            self.month = month
            self.refresh()

    def previous_month(self):
        self.set_month(self.month - 1)

    def next_month(self):
        self.set_month(self.month + 1)

    def set_year(self, year: int):
        if year != self.year:
            self.year = year
            self.refresh()

    def add_habit(self, name) -> HabitMonth:
        if not (name or "").strip():
            raise ValidationError("name is required")
        self._require_user()

        habit = self.backend.create_habit(self.user.pk, name)
        self.habits.append(habit)
        return habit

    def toggle_day(self, habit_id, day: int) -> Optional[str]:
        self._require_user()
        self._flip(habit_id, day)
        now_done = day in self.completed_days(habit_id)

        try:
            status = self.backend.toggle_day(habit_id, day, self.month, self.year)
        except Exception as exc:
            self.last_error = exc
            logger.warning("Toggle of habit %s day %s failed: %s", habit_id, day, exc)
            if self.revert_on_failure:
                self._flip(habit_id, day)
            raise

        if (status == ADDED) != now_done:
            logger.warning(
                "Habit %s day %s is %s on the server but %s locally",
                habit_id, day, status, "added" if now_done else "removed",
            )
        return status

    def delete_habit(self, habit_id) -> bool:
        self._require_user()
        self.habits = [h for h in self.habits if h.id != habit_id]

        try:
            return self.backend.delete_habit(habit_id)
        except Exception as exc:
            self.last_error = exc
            logger.warning("Delete of habit %s failed: %s", habit_id, exc)
            raise

    def _find(self, habit_id) -> Optional[HabitMonth]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def _flip(self, habit_id, day):
        self.habits = [
            h.with_day_toggled(day) if h.id == habit_id else h
            for h in self.habits
        ]

    def _require_user(self):
        if self.user is None:
            raise ValidationError("login required")
