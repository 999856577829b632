import graphene
from django.contrib.auth import get_user_model
from graphene_django import DjangoObjectType

from habits.services.analytics import analyze_month
from habits.services.ledger import CompletionLedger
from habits.services.registry import HabitRegistry
from habits.store import HabitStore


class UserType(DjangoObjectType):
    created_at = graphene.DateTime(required=True)

    class Meta:
        model = get_user_model()
        fields = ("id", "username")

    def resolve_created_at(self, info):
        return self.date_joined


class HabitMonthType(graphene.ObjectType):
    id = graphene.ID(required=True)
    name = graphene.String(required=True)
    completed_days = graphene.List(graphene.NonNull(graphene.Int), required=True)

    def resolve_completed_days(self, info):
        return sorted(self.completed_days)


class HabitRateType(graphene.ObjectType):
    habit = graphene.Field(HabitMonthType, required=True)
    completion_rate = graphene.Int(required=True)


class MonthAnalyticsType(graphene.ObjectType):
    days_in_month = graphene.Int(required=True)
    total_checks = graphene.Int(required=True)
    completion_rate = graphene.Int(required=True)
    best_habit = graphene.Field(HabitMonthType)
    daily_counts = graphene.List(graphene.NonNull(graphene.Int), required=True)
    most_productive_day = graphene.Int(required=True)
    habit_rates = graphene.List(graphene.NonNull(HabitRateType), required=True)


class Query(graphene.ObjectType):
    month_snapshot = graphene.List(
        graphene.NonNull(HabitMonthType),
        user_id=graphene.ID(required=True),
        month=graphene.Int(required=True),
        year=graphene.Int(required=True),
    )
    month_analytics = graphene.Field(
        MonthAnalyticsType,
        user_id=graphene.ID(required=True),
        month=graphene.Int(required=True),
        year=graphene.Int(required=True),
    )
    completions = graphene.List(
        graphene.NonNull(graphene.Int),
        habit_id=graphene.ID(required=True),
        month=graphene.Int(required=True),
        year=graphene.Int(required=True),
    )

    def resolve_month_snapshot(self, info, user_id, month, year):
        with HabitStore() as store:
            return CompletionLedger(store).month_snapshot(user_id, month, year)

    def resolve_month_analytics(self, info, user_id, month, year):
        with HabitStore() as store:
            habits = CompletionLedger(store).month_snapshot(user_id, month, year)
        return analyze_month(habits, month, year)

    def resolve_completions(self, info, habit_id, month, year):
        with HabitStore() as store:
            return sorted(CompletionLedger(store).completions_for(habit_id, month, year))


class Login(graphene.Mutation):
    class Arguments:
        username = graphene.String(required=True)

    user = graphene.Field(UserType)

    def mutate(self, info, username):
        with HabitStore() as store:
            user = HabitRegistry(store).resolve_user(username)
        return Login(user=user)


class CreateHabit(graphene.Mutation):
    class Arguments:
        user_id = graphene.ID(required=True)
        name = graphene.String(required=True)

    habit = graphene.Field(HabitMonthType)

    def mutate(self, info, user_id, name):
        with HabitStore() as store:
            habit = HabitRegistry(store).create_habit(user_id, name)
        return CreateHabit(habit=habit)
    

class ToggleDay(graphene.Mutation):
    class Arguments:
        habit_id = graphene.ID(required=True)
        day = graphene.Int(required=True)
        month = graphene.Int(required=True)
        year = graphene.Int(required=True)

    status = graphene.String(required=True, description="added or removed")

    @classmethod
    def mutate(cls, root, info, habit_id, day, month, year):
        with HabitStore() as store:
            status = CompletionLedger(store).toggle(habit_id, day, month, year)
        return cls(status=status)


class DeleteHabit(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)

    success = graphene.Boolean(required=True)
    deleted_id = graphene.ID(required=True)

    def mutate(self, info, id):
        # Deleting an absent habit still succeeds.
        with HabitStore() as store:
            HabitRegistry(store).delete_habit(id)
        return DeleteHabit(success=True, deleted_id=id)

    
class Mutation(graphene.ObjectType):
    login = Login.Field()
    create_habit = CreateHabit.Field()
    toggle_day = ToggleDay.Field()
    delete_habit = DeleteHabit.Field()
