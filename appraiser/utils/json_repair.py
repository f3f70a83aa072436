"""
Best-effort JSON recovery for completion responses.

Large structured outputs are frequently cut off by the token limit. Rather than
failing the stage, close whatever string/array/object was left open and retry.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List

from appraiser.errors import ExternalServiceError

logger = logging.getLogger(__name__)

_TRAILING_COMMA = re.compile(r",\s*$")
_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json / ``` fence if present."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def repair_truncated_json(text: str) -> str:
    """Close an unterminated string and any open arrays/objects, innermost first."""
    open_stack: List[str] = []
    in_string = False
    escaped = False

    for char in text:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char in _CLOSERS:
            open_stack.append(char)
        elif char in ("}", "]") and open_stack:
            open_stack.pop()

    repaired = text
    if in_string:
        repaired += '"'
    repaired = _TRAILING_COMMA.sub("", repaired)
    repaired += "".join(_CLOSERS[opener] for opener in reversed(open_stack))
    return repaired


def safe_json_parse(content: str, stage: str) -> Any:
    cleaned = strip_code_fence(content)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    repaired = repair_truncated_json(cleaned)
    try:
        value = json.loads(repaired)
    except json.JSONDecodeError:
        logger.error(f"JSON parse error in {stage}: {content[:500]}")
        raise ExternalServiceError(f"Failed to parse {stage} response as JSON", "OpenAI", stage=stage)

    logger.warning(f"Repaired truncated JSON in {stage}")
    return value
