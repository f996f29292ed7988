"""Normalization of BugSink API response bodies.

The API answers in three shapes: a single object, a bare array (teams),
or a cursor-paginated envelope ``{"next": ..., "previous": ..., "results": [...]}``.
List calls collapse all three into a ``ListResult``.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse


@dataclass
class ListResult:
    """Normalized list response."""

    items: list = field(default_factory=list)
    next_cursor: Optional[str] = None

    def has_more(self) -> bool:
        """Check if the server reported another page."""
        return self.next_cursor is not None

    def append(self, more_items):
        """Add items from a further page, in place."""
        self.items.extend(more_items)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def normalize(raw: Any) -> ListResult:
    """Collapse any list-call response body into a ListResult."""
    if isinstance(raw, dict):
        if 'results' in raw:
            return ListResult(
                items=list(raw.get('results') or []),
                next_cursor=raw.get('next'),
            )
        return ListResult(items=[raw])
    if isinstance(raw, list):
        return ListResult(items=raw)
    return ListResult()


def normalize_single(raw: Any) -> dict:
    """Normalize a single-entity response body."""
    if raw is None:
        return {}
    return raw


def cursor_from_next(next_value: Optional[str]) -> Optional[str]:
    """Extract the cursor token from a ``next`` link.

    The API returns ``next`` as a full URL carrying a ``cursor`` query
    parameter. A value that is not a URL is taken to be the token itself.
    """
    if not next_value:
        return None
    parsed = urlparse(next_value)
    if not parsed.query:
        return next_value
    cursor = parse_qs(parsed.query).get('cursor')
    return cursor[0] if cursor else None
