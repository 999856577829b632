import logging
from typing import List

from habits.exceptions import NotFoundError, ValidationError
from habits.models import Habit
from habits.services.analytics import HabitMonth
from habits.services.ledger import coerce_id
from habits.store import HabitStore

logger = logging.getLogger(__name__)


def _clean(value, field_name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name} is required")
    return cleaned


class HabitRegistry:
    """Users and the habits they own."""

    def __init__(self, store: HabitStore):
        self.store = store

    def resolve_user(self, username):
        """
        Login by name: returns the user with this name, creating it first
        if nobody has claimed the name yet.
        """
        username = _clean(username, "username")

        with self.store.transaction():
            user, created = self.store.users().get_or_create(username=username)
            if created:
                user.set_unusable_password()
                user.save(update_fields=["password"])
                logger.info("Created user %s (%s)", user.pk, username)
        return user

    def create_habit(self, user_id, name) -> HabitMonth:
        user_id = coerce_id(user_id, "user_id")
        name = _clean(name, "name")

        with self.store.transaction():
            if not self.store.users().filter(pk=user_id).exists():
                raise NotFoundError(f"user {user_id} does not exist")
            habit = self.store.habits().create(owner_id=user_id, name=name, archived=False)

        logger.info("User %s created habit %s %r", user_id, habit.pk, name)
        return HabitMonth(id=habit.pk, name=habit.name)

    def list_active_habits(self, user_id) -> List[Habit]:
        user_id = coerce_id(user_id, "user_id")
        with self.store.transaction():
            return list(
                self.store.habits()
                .filter(owner_id=user_id, archived=False)
                .order_by("id")
            )

    def delete_habit(self, habit_id) -> bool:
        """
        Removes the habit and every completion recorded against it in one
        transaction. Deleting a missing habit is a successful no-op.
        """
        habit_id = coerce_id(habit_id, "habit_id")
        with self.store.transaction():
            deleted_completions, _ = self.store.completions().filter(habit_id=habit_id).delete()
            deleted_habits, _ = self.store.habits().filter(pk=habit_id).delete()

        if not deleted_habits:
            logger.debug("Habit %s already absent, nothing to delete", habit_id)
            return False

        logger.info("Deleted habit %s with %d completions", habit_id, deleted_completions)
        return True
