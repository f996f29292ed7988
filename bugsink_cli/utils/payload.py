"""Parsing of JSON payload arguments for create/update commands."""

import json

from ..errors import ValidationError


def parse_json_arg(text) -> dict:
    """Parse a JSON object given on the command line.

    Args:
        text: Raw argument, e.g. '{"name": "Backend"}'. None or empty
            yields an empty dict.

    Raises:
        ValidationError: If text is not valid JSON or not an object
    """
    if not text:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}")
    if not isinstance(data, dict):
        raise ValidationError(
            f"Invalid JSON: expected an object, got {type(data).__name__}"
        )
    return data
