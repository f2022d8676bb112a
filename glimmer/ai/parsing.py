"""Helpers for pulling structured data out of free-form model output."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable, Optional

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the JSON object spanning the first ``{`` to the last ``}``.

    Models often wrap JSON in prose or code fences; anything around the
    braces is ignored. Returns None when no parsable object is found.
    """
    match = _JSON_BLOCK.search(text or "")
    if match is None:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def first_text(data: Dict[str, Any], keys: Iterable[str]) -> Optional[str]:
    """Return the first non-empty value among ``keys``, as a string."""
    for key in keys:
        value = data.get(key)
        if value:
            if isinstance(value, list):
                return " ".join(str(item) for item in value)
            return str(value)
    return None
