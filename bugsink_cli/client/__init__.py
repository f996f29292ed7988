"""Client package for BugSink CLI."""

from .bugsink_client import BugsinkClient
from .response import ListResult, normalize, normalize_single, cursor_from_next
from ..errors import (
    BugsinkError,
    ConfigError,
    ClientError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    "BugsinkClient",
    "ListResult",
    "normalize",
    "normalize_single",
    "cursor_from_next",
    "BugsinkError",
    "ConfigError",
    "ClientError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
]
