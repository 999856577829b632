import json

import pytest
from django.test import Client

from habits.models import Completion, Habit

pytestmark = pytest.mark.django_db


def _post_graphql(client, query: str, variables=None):
    payload = {"query": query}
    if variables is not None:
        payload["variables"] = variables

    response = client.post("/graphql/", data=payload, content_type="application/json")
    assert response.status_code == 200
    data = json.loads(response.content)

    # helpful assertion message if graphql errors happen
    assert "errors" not in data, data.get("errors")
    return data["data"]


def _post_graphql_errors(client, query: str, variables=None):
    response = client.post(
        "/graphql/",
        data={"query": query, "variables": variables or {}},
        content_type="application/json",
    )
    payload = json.loads(response.content)
    assert "errors" in payload
    return [e["message"] for e in payload["errors"]]


LOGIN = """
  mutation($username: String!) {
    login(username: $username) { user { id username createdAt } }
  }
"""

CREATE = """
  mutation($userId: ID!, $name: String!) {
    createHabit(userId: $userId, name: $name) { habit { id name completedDays } }
  }
"""

TOGGLE = """
  mutation($habitId: ID!, $day: Int!, $month: Int!, $year: Int!) {
    toggleDay(habitId: $habitId, day: $day, month: $month, year: $year) { status }
  }
"""

DELETE = """
  mutation($id: ID!) {
    deleteHabit(id: $id) { success deletedId }
  }
"""


def test_login__creates_user_once():
    client = Client()

    first = _post_graphql(client, LOGIN, {"username": "alice"})["login"]["user"]
    second = _post_graphql(client, LOGIN, {"username": "alice"})["login"]["user"]

    assert first["id"] == second["id"]
    assert first["username"] == "alice"
    assert first["createdAt"]


def test_login__blank_username_is_rejected():
    messages = _post_graphql_errors(Client(), LOGIN, {"username": "  "})
    assert any("username is required" in m for m in messages)


def test_create_habit__returns_empty_completed_days(user):
    client = Client()

    habit = _post_graphql(client, CREATE, {"userId": str(user.id), "name": "Run"})["createHabit"]["habit"]

    assert habit["name"] == "Run"
    assert habit["completedDays"] == []
    assert Habit.objects.filter(pk=habit["id"], owner=user, archived=False).exists()


def test_create_habit__empty_name_is_rejected(user):
    messages = _post_graphql_errors(Client(), CREATE, {"userId": str(user.id), "name": ""})

    assert any("name is required" in m for m in messages)
    assert not Habit.objects.exists()


def test_toggle_day__added_then_removed(user):
    client = Client()
    habit = Habit.objects.create(owner=user, name="Run")
    variables = {"habitId": str(habit.id), "day": 5, "month": 0, "year": 2026}

    first = _post_graphql(client, TOGGLE, variables)["toggleDay"]
    second = _post_graphql(client, TOGGLE, variables)["toggleDay"]

    assert first["status"] == "added"
    assert second["status"] == "removed"
    assert not Completion.objects.filter(habit=habit).exists()


def test_delete_habit__succeeds_even_when_already_absent(user):
    client = Client()
    habit = Habit.objects.create(owner=user, name="Run")
    Completion.objects.create(habit=habit, day=3, month=0, year=2026)

    first = _post_graphql(client, DELETE, {"id": str(habit.id)})["deleteHabit"]
    second = _post_graphql(client, DELETE, {"id": str(habit.id)})["deleteHabit"]

    assert first == {"success": True, "deletedId": str(habit.id)}
    assert second["success"] is True
    assert not Completion.objects.filter(habit_id=habit.id).exists()


def test_delete_habit__non_numeric_id_is_a_validation_error():
    messages = _post_graphql_errors(Client(), DELETE, {"id": "abc"})
    assert any("habit_id must be an integer" in m for m in messages)


def test_toggle_day__non_numeric_habit_id_is_a_validation_error():
    variables = {"habitId": "abc", "day": 1, "month": 0, "year": 2026}
    messages = _post_graphql_errors(Client(), TOGGLE, variables)
    assert any("habit_id must be an integer" in m for m in messages)
