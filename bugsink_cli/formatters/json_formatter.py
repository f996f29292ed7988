"""JSON output formatter for BugSink CLI."""

import json
import sys
from datetime import datetime, timezone

from ..client.response import ListResult


class JsonFormatter:
    """Outputs pretty-printed JSON for scripts and agents."""

    def output_result(self, result):
        """Output the records themselves; plain text is passed through."""
        if isinstance(result, ListResult):
            result = result.items
        elif hasattr(result, 'to_dict'):
            result = result.to_dict()
        if isinstance(result, str):
            print(result)
            return
        print(json.dumps(result, indent=2))

    def output_success(self, message, **data):
        print(json.dumps({'status': 'ok', 'message': message, **data}, indent=2))

    def output_error(self, error):
        """Output error as structured JSON to stderr."""
        if hasattr(error, 'to_dict'):
            error_dict = error.to_dict()
        else:
            error_dict = {
                'error': type(error).__name__,
                'message': str(error)
            }
        error_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        print(json.dumps(error_dict, indent=2), file=sys.stderr)
