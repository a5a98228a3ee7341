"""
Template-based subtask generation for new projects.

Picks a fixed template by keyword matching on the project description
(or name) and turns each row into a backlog task.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from kanban_calendar.models.enums import TaskStatus
from kanban_calendar.models.task import TaskCreate


class SubtaskTemplate(NamedTuple):
    title: str
    complexity: int
    hours: int


WEB_DEVELOPMENT = "web development"
MOBILE_APP = "mobile app"
MARKETING_CAMPAIGN = "marketing campaign"
DEFAULT = "default"

TASK_TEMPLATES: dict[str, list[SubtaskTemplate]] = {
    WEB_DEVELOPMENT: [
        SubtaskTemplate("Setup project structure", 2, 2),
        SubtaskTemplate("Design database schema", 3, 3),
        SubtaskTemplate("Create API endpoints", 4, 6),
        SubtaskTemplate("Build frontend components", 4, 8),
        SubtaskTemplate("Implement authentication", 3, 4),
        SubtaskTemplate("Testing and debugging", 2, 4),
        SubtaskTemplate("Deploy to production", 2, 2),
    ],
    MOBILE_APP: [
        SubtaskTemplate("Setup React Native project", 2, 2),
        SubtaskTemplate("Design app navigation", 3, 3),
        SubtaskTemplate("Create core screens", 4, 8),
        SubtaskTemplate("Implement state management", 3, 4),
        SubtaskTemplate("Add API integration", 3, 4),
        SubtaskTemplate("Test on devices", 2, 3),
        SubtaskTemplate("Prepare for app store", 2, 2),
    ],
    MARKETING_CAMPAIGN: [
        SubtaskTemplate("Market research", 2, 4),
        SubtaskTemplate("Define target audience", 2, 2),
        SubtaskTemplate("Create content strategy", 3, 4),
        SubtaskTemplate("Design marketing materials", 3, 6),
        SubtaskTemplate("Launch campaign", 2, 2),
        SubtaskTemplate("Monitor and optimize", 2, 3),
        SubtaskTemplate("Analyze results", 2, 2),
    ],
    DEFAULT: [
        SubtaskTemplate("Research and planning", 2, 3),
        SubtaskTemplate("Initial setup", 2, 2),
        SubtaskTemplate("Core implementation", 4, 6),
        SubtaskTemplate("Testing and refinement", 3, 4),
        SubtaskTemplate("Final review", 2, 2),
    ],
}

# Checked in order; first match wins
KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    (WEB_DEVELOPMENT, ("web", "website", "api")),
    (MOBILE_APP, ("mobile", "app", "react native")),
    (MARKETING_CAMPAIGN, ("marketing", "campaign", "promotion")),
]


def select_template(project_name: str, project_description: Optional[str] = None) -> str:
    """Return the template key matching the project description or name."""
    text = (project_description or project_name or "").lower()
    for key, keywords in KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return key
    return DEFAULT


def generate_subtasks(
    project_name: str,
    project_description: Optional[str] = None,
) -> list[TaskCreate]:
    """
    Build backlog tasks for a new project.

    Args:
        project_name: Project name, used in each task description
        project_description: Text searched for template keywords

    Returns:
        Tasks in template order with position set to their index
    """
    template = TASK_TEMPLATES[select_template(project_name, project_description)]
    return [
        TaskCreate(
            title=row.title,
            description=f"Auto-generated subtask for: {project_name}",
            complexity_level=row.complexity,
            estimated_hours=row.hours,
            status=TaskStatus.BACKLOG,
            position=index,
        )
        for index, row in enumerate(template)
    ]
