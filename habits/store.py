import logging
from contextlib import contextmanager

from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections, transaction

from habits.exceptions import StoreError
from habits.models import Completion, Habit

logger = logging.getLogger(__name__)


class HabitStore:
    """
    Handle on the relational store backing users, habits and completions.

    A store is bound to one database alias and is meant to be scoped to a
    single request or unit of work:

        with HabitStore() as store:
            CompletionLedger(store).toggle(habit_id, 5, 0, 2026)

    Closing releases the alias' connection, except when an outer transaction
    is still open on it (the owner of that transaction releases it instead).
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._closed = False

    def __enter__(self) -> "HabitStore":
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        connection = connections[self.using]
        if not connection.in_atomic_block:
            connection.close()

    def _ensure_open(self):
        if self._closed:
            raise StoreError(f"store for database {self.using!r} is closed")

    @contextmanager
    def transaction(self):
        """
        Run the body as one atomic unit. Database failures escaping the body
        are re-raised as StoreError.
        """
        self._ensure_open()
        try:
            with transaction.atomic(using=self.using):
                yield self
        except DatabaseError as exc:
            logger.exception("Store operation failed on %r", self.using)
            raise StoreError(str(exc)) from exc

    def atomic(self):
        """Nested savepoint inside an open transaction."""
        return transaction.atomic(using=self.using)

    def users(self):
        self._ensure_open()
        return get_user_model()._default_manager.db_manager(self.using)

    def habits(self):
        self._ensure_open()
        return Habit.objects.db_manager(self.using)

    def completions(self):
        self._ensure_open()
        return Completion.objects.db_manager(self.using)
