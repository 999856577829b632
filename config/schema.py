"""
Root GraphQL schema for the habit tracker.

The habits app owns every query and mutation; this module only composes
them and adds a liveness field for load balancers and GraphiQL.
"""
import graphene

from habits.schema import Mutation as TrackerMutation, Query as TrackerQuery


class Query(TrackerQuery, graphene.ObjectType):
    ping = graphene.String(
        default_value="pong",
        description="Liveness check; answers without touching the database.",
    )


class Mutation(TrackerMutation, graphene.ObjectType):
    pass


schema = graphene.Schema(query=Query, mutation=Mutation)
