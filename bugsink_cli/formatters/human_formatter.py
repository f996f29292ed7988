"""Human-readable output formatter for BugSink CLI."""

import sys
import json

from ..client.response import ListResult

MAX_COLUMN_WIDTH = 40


def format_value(value) -> str:
    """Render one table cell."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'))
    if value is None:
        return ''
    return str(value)


class HumanFormatter:
    """Outputs tables and key/value listings for direct terminal use."""

    def output_result(self, result):
        """Output result in human-readable format."""
        if isinstance(result, ListResult):
            self._format_list(result.items)
            if result.has_more():
                print(f"(more results, next: {result.next_cursor}; use --all to fetch every page)",
                      file=sys.stderr)
        elif isinstance(result, list):
            self._format_list(result)
        elif isinstance(result, dict):
            self._format_dict(result)
        else:
            print(result)

    def output_success(self, message, **data):
        print(f"✓ {message}")

    def output_error(self, error):
        """Output error in human-readable format."""
        message = getattr(error, 'message', str(error))
        suggestion = getattr(error, 'suggestion', None)

        print(f"✗ {message}", file=sys.stderr)
        if suggestion:
            print(f"  Suggestion: {suggestion}", file=sys.stderr)

    def _format_list(self, items):
        """Format a list of items."""
        if not items:
            print("No data")
            return

        if isinstance(items[0], dict):
            self._format_table(items)
        else:
            for item in items:
                print(f"  - {item}")

    def _format_dict(self, data, indent=0):
        """Format a dictionary."""
        prefix = "  " * indent
        for key, value in data.items():
            if isinstance(value, dict) and value:
                print(f"{prefix}{key}:")
                self._format_dict(value, indent + 1)
            else:
                print(f"{prefix}{key}: {format_value(value)}")

    def _format_table(self, items):
        """Format list of dicts as a simple table."""
        keys = list(items[0].keys())

        widths = {}
        for key in keys:
            values = [format_value(item.get(key))[:MAX_COLUMN_WIDTH] for item in items]
            widths[key] = max(len(key), max(len(v) for v in values))

        header = "  ".join(key.ljust(widths[key]) for key in keys)
        print(header)
        print("-" * len(header))

        for item in items:
            row = "  ".join(
                format_value(item.get(key))[:MAX_COLUMN_WIDTH].ljust(widths[key])
                for key in keys
            )
            print(row.rstrip())

        print(f"\n({len(items)} total)")
