"""Output formatters for BugSink CLI."""

from .json_formatter import JsonFormatter
from .human_formatter import HumanFormatter
from .quiet_formatter import QuietFormatter

__all__ = ["JsonFormatter", "HumanFormatter", "QuietFormatter"]
