"""
Helpers for pulling a JSON object out of free-form language-model replies.
"""
import json
import re
from typing import Any, Dict, Optional

from ..api.exceptions import ResponseParseError

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(reply: str) -> str:
    """Remove ``` and ```json markers and surrounding whitespace."""
    return _FENCE_RE.sub("", reply or "").strip()


def find_balanced_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} substring of text, or None.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    while start != -1:
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
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        # Unbalanced from this brace on; try the next opening brace
        start = text.find("{", start + 1)
    return None


def parse_model_json(reply: str) -> Dict[str, Any]:
    """
    Parse the JSON object embedded in a model reply.

    Tries the first balanced object first, then the whole cleaned reply.

    Raises:
        ResponseParseError: If no JSON object can be recovered
    """
    cleaned = strip_code_fences(reply)

    candidates = []
    embedded = find_balanced_object(cleaned)
    if embedded is not None:
        candidates.append(embedded)
    candidates.append(cleaned)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ResponseParseError(f"Model reply is not a JSON object: {cleaned[:200]!r}")
