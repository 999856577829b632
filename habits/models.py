from __future__ import annotations
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models

class Habit(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='habits',
    )
    name = models.CharField(max_length=120)
    # Written False at creation and filtered on read; nothing sets it yet.
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    if TYPE_CHECKING:
        # Django dynamically injects this via related_name="completions"
        completions = None

    def __str__(self) -> str:
        return self.name
    

class Completion(models.Model):
    """
    One completed day of a habit. Presence means done; there is no flag.

    `month` is 0-indexed (January == 0), matching the client calendar.
    """
    habit = models.ForeignKey(Habit, on_delete=models.CASCADE,
                              related_name="completions")
    day = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField()
    year = models.PositiveIntegerField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["habit", "day", "month", "year"],
                name="unique_completion_per_habit_per_day",
            )
        ]
        indexes = [
            models.Index(fields=["habit", "month", "year"], name="completion_habit_month_idx"),
        ]
        ordering = ["year", "month", "day"]

    def __str__(self) -> str:
        return f"{self.habit.name} @ {self.year}-{self.month + 1:02d}-{self.day:02d}"
