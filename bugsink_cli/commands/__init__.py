"""Command handlers for BugSink CLI."""

from .settings import SettingsCommands
from .teams import TeamCommands
from .projects import ProjectCommands
from .issues import IssueCommands
from .events import EventCommands
from .releases import ReleaseCommands

__all__ = [
    "SettingsCommands", "TeamCommands", "ProjectCommands",
    "IssueCommands", "EventCommands", "ReleaseCommands",
]
