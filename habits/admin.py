from django.contrib import admin

from .models import Completion, Habit


@admin.register(Habit)
class HabitAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "owner", "archived", "created_at")
    list_filter = ("archived",)
    search_fields = ("name", "owner__username")


@admin.register(Completion)
class CompletionAdmin(admin.ModelAdmin):
    list_display = ("id", "habit", "day", "month", "year")
    list_filter = ("year", "month")
