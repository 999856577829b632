"""
URL configuration for the habit tracker.

- /graphql/  login, month snapshot/analytics, habit and completion mutations
- /admin/    Django admin over users, habits and completions
"""
from django.contrib import admin
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from graphene_django.views import GraphQLView


urlpatterns = [
    path('admin/', admin.site.urls),
    path('graphql/', csrf_exempt(GraphQLView.as_view(graphiql=True))),
]
