"""Minimal output formatter: identifiers only, one per line."""

from ..client.response import ListResult
from .human_formatter import HumanFormatter


def record_id(record):
    """Pick the identifier of a record (integer id, else uuid)."""
    if not isinstance(record, dict):
        return record
    value = record.get('id')
    return value if value is not None else record.get('uuid')


class QuietFormatter(HumanFormatter):
    """Outputs IDs only, for piping into other commands."""

    def output_result(self, result):
        if isinstance(result, ListResult):
            result = result.items
        if isinstance(result, list):
            for item in result:
                print(record_id(item))
        elif isinstance(result, dict):
            print(record_id(result))
        else:
            print(result)

    def output_success(self, message, **data):
        pass
