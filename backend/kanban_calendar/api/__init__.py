"""API routers."""

from kanban_calendar.api import calendar, projects, tasks

__all__ = ["calendar", "projects", "tasks"]
