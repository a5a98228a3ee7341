"""Pydantic models for projects, tasks, calendar blocks and schedules."""
