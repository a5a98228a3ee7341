"""Kanban Calendar backend: projects, Kanban tasks and calendar scheduling."""
