"""Issue commands (read-only: the API has no issue write endpoints)."""

from ..config import DEFAULT_PAGE_LIMIT
from .paging import fetch_all_pages


class IssueCommands:
    """Commands for browsing issues."""

    def __init__(self, client):
        self.client = client

    def list(self, project_id: int = None, sort: str = 'last_seen',
             order: str = 'desc', limit: int = DEFAULT_PAGE_LIMIT,
             cursor: str = None, fetch_all: bool = False):
        """List issues for a project.

        Falls back to the configured project ID when none is given.

        Args:
            project_id: Project ID override
            sort: last_seen or digest_order
            order: asc or desc
            limit: Page size
            cursor: Start from this page
            fetch_all: Follow next cursors and return every page

        Raises:
            ValidationError: If project_id is not positive, or no project
                ID is available
        """
        project_id = self.client.config.require_project_id(project_id)

        def fetch_page(cursor=None):
            return self.client.issues_list(
                project_id=project_id,
                sort=sort or 'last_seen',
                order=order or 'desc',
                limit=limit,
                cursor=cursor,
            )

        result = fetch_page(cursor=cursor)
        if fetch_all:
            result = fetch_all_pages(fetch_page, result)
        return result

    def get(self, uuid: str) -> dict:
        return self.client.issue_get(uuid)
