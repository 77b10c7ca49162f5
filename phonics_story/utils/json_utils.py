"""Recover JSON objects from noisy LLM output."""

import json
import re
from typing import Any, Optional

_ROLE_ECHO = re.compile(r"^assistant\s*\n", re.IGNORECASE)


def extract_first_json_object(text: str) -> Optional[str]:
    """Return the balanced ``{...}`` region that starts at the first brace.

    Braces inside string literals are ignored. Returns None when the first
    object is never closed.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_str = False
    esc = False
    for i in range(start, len(text)):
        c = text[i]
        if esc:
            esc = False
            continue
        if c == "\\" and in_str:
            esc = True
            continue
        if c == '"':
            in_str = not in_str
            continue
        if in_str:
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_json_loose(text: str) -> Any:
    """Parse the first JSON object found in an LLM response.

    Strips an echoed ``assistant`` role marker and any commentary before the
    first ``{``, then parses the balanced object. Falls back to the whole
    trimmed text when no balanced object exists.

    Raises:
        json.JSONDecodeError: nothing parseable was found.
    """
    cleaned = str(text).strip()
    cleaned = _ROLE_ECHO.sub("", cleaned, count=1)

    json_start = cleaned.find("{")
    if json_start > 0:
        cleaned = cleaned[json_start:]

    cleaned = cleaned.strip()
    candidate = extract_first_json_object(cleaned)
    return json.loads(candidate if candidate is not None else cleaned)
