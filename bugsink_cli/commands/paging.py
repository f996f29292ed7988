"""Multi-page accumulation for cursor-paginated list calls."""

from ..client.response import ListResult, cursor_from_next


def fetch_all_pages(fetch_page, first: ListResult) -> ListResult:
    """Follow next cursors until the last page, appending onto first.

    Args:
        fetch_page: Callable taking ``cursor=`` and returning a ListResult
        first: The page already fetched

    Returns:
        first, holding every item; its next_cursor is cleared
    """
    result = first
    while result.has_more():
        cursor = cursor_from_next(result.next_cursor)
        if cursor is None:
            break
        page = fetch_page(cursor=cursor)
        result.append(page.items)
        result.next_cursor = page.next_cursor
    result.next_cursor = None
    return result
