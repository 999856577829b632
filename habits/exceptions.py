class HabitsError(Exception):
    """Base class for errors raised by the habits core."""


class ValidationError(HabitsError):
    """A required field is missing, empty, or out of range."""


class NotFoundError(HabitsError):
    """The habit or user being operated on does not exist."""


class StoreError(HabitsError):
    """The underlying database failed. Never retried by the core."""
