"""Event commands (read-only: events arrive through the Sentry SDK)."""

from ..config import DEFAULT_PAGE_LIMIT
from .paging import fetch_all_pages


class EventCommands:
    """Commands for browsing events and their stacktraces."""

    def __init__(self, client):
        self.client = client

    def list(self, issue_uuid: str, order: str = 'desc',
             limit: int = DEFAULT_PAGE_LIMIT, cursor: str = None,
             fetch_all: bool = False):
        """List events for an issue, optionally following every page."""

        def fetch_page(cursor=None):
            return self.client.events_list(
                issue_uuid=issue_uuid,
                order=order or 'desc',
                limit=limit,
                cursor=cursor,
            )

        result = fetch_page(cursor=cursor)
        if fetch_all:
            result = fetch_all_pages(fetch_page, result)
        return result

    def get(self, uuid: str) -> dict:
        return self.client.event_get(uuid)

    def stacktrace(self, uuid: str) -> str:
        """Get the pre-formatted stacktrace text for an event."""
        return self.client.event_stacktrace(uuid)
