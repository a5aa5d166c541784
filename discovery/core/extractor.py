from __future__ import annotations

import json
import re
from typing import Any, Dict

from discovery.errors import InvalidResponseShape, MalformedResponse


_CODE_FENCE_RE = re.compile(r"```json\n?|\n?```")
# Greedy on purpose: spans from the first "{" to the last "}" in the text.
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE_RE.sub("", text).strip()


def extract_json(text: str) -> Dict[str, Any]:
    """Parse the JSON object embedded in a model response.

    Fences are removed first, then everything between the first "{" and the
    last "}" is parsed. Text holding several objects, or unbalanced braces
    inside string values, can be over- or under-captured.
    """
    cleaned = strip_code_fences(text or "")
    match = _JSON_OBJECT_RE.search(cleaned)
    if not match:
        raise MalformedResponse("No JSON object found in the AI response")
    try:
        return json.loads(match.group(0), parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedResponse(f"Could not parse JSON from the AI response: {exc}") from exc


def require_recommendations(data: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(data.get("recommendations"), list):
        raise InvalidResponseShape("Invalid JSON structure received: missing recommendations list")
    return data
