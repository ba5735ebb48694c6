"""Entities for the timeline domain."""

from .resource import ResourceRow
from .task import Task, TaskDebug

__all__ = ["ResourceRow", "Task", "TaskDebug"]
