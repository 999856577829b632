import pytest

from habits.services.ledger import CompletionLedger
from habits.services.registry import HabitRegistry
from habits.store import HabitStore


@pytest.fixture()
def user(django_user_model):
    return django_user_model.objects.create_user(username="u1")


@pytest.fixture()
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="u2")


@pytest.fixture()
def store():
    with HabitStore() as store:
        yield store


@pytest.fixture()
def registry(store):
    return HabitRegistry(store)


@pytest.fixture()
def ledger(store):
    return CompletionLedger(store)
