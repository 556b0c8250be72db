# threadfinder/scrapers/embedded_json.py

"""Pull JSON arrays out of inline ``<script>`` text.

Some stores render their result list into a script block instead of
the DOM.  These helpers cut the array out of the script text without
parsing the whole page; only the excised substring goes to ``json``.
"""

import json
import re
from typing import Any


def _match_bracket(text: str, start: int) -> int | None:
    """Index of the bracket closing the one at *start*, string-aware."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
            if depth == 0:
                return index
    return None


def extract_embedded_array(
    script_text: str, marker_token: str,
) -> str | None:
    """Return the raw JSON array assigned to ``"<marker_token>":``.

    The first occurrence whose brackets balance wins.  Returns ``None``
    when the marker is absent or the array is truncated.
    """
    pattern = re.compile(
        r'"' + re.escape(marker_token) + r'"\s*:\s*\['
    )
    for match in pattern.finditer(script_text):
        start = match.end() - 1
        end = _match_bracket(script_text, start)
        if end is not None:
            return script_text[start : end + 1]
    return None


def extract_object_arrays(script_text: str, key: str) -> list[str]:
    """Return every flat ``[{...}]`` run mentioning ``"<key>"``.

    "Flat" means no square brackets inside the objects; nested objects
    are fine.
    """
    pattern = re.compile(
        r'\[\{[^\[\]]*"' + re.escape(key) + r'"[^\[\]]*\}\]'
    )
    return pattern.findall(script_text)


def parse_json_array(raw: str | None) -> list[dict[str, Any]]:
    """Decode *raw* as a list of objects; ``[]`` if it is anything else."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]
