from __future__ import annotations

import json
import logging
import re
from enum import Enum
from typing import Any

from campusmap.core.text import clean_string, clean_string_list
from campusmap.domain.schemas.assistant import AssistantEventDetails, AssistantStructuredResponse

logger = logging.getLogger(__name__)

_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = {"}", "]"}
_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)


class _ScanState(Enum):
    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_STRING_ESCAPED = "in_string_escaped"


def strip_json_wrapper(value: str) -> str:
    trimmed = value.strip()
    if not trimmed.startswith("```"):
        return trimmed
    without_fence = _FENCE_OPEN.sub("", trimmed, count=1)
    closing = without_fence.rfind("```")
    if closing >= 0:
        without_fence = without_fence[:closing]
    return without_fence.strip()


def auto_close_json(fragment: str) -> str | None:
    """Complete a JSON fragment that was cut off mid-structure.

    Returns the fragment with any open string and every open object/array
    closed in LIFO order, or ``None`` when a closer does not match the
    innermost open structure.
    """
    text = fragment.strip()
    state = _ScanState.NORMAL
    stack: list[str] = []

    for char in text:
        if state is _ScanState.IN_STRING_ESCAPED:
            state = _ScanState.IN_STRING
            continue

        if state is _ScanState.IN_STRING:
            if char == "\\":
                state = _ScanState.IN_STRING_ESCAPED
            elif char == '"':
                state = _ScanState.NORMAL
            continue

        if char == '"':
            state = _ScanState.IN_STRING
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return None

    if state is _ScanState.IN_STRING_ESCAPED:
        # A lone trailing backslash cannot be completed; drop it.
        text = text[:-1] + '"'
    elif state is _ScanState.IN_STRING:
        text += '"'

    return text + "".join(reversed(stack))


def repair_json_fragment(candidate: str) -> AssistantStructuredResponse | None:
    repaired = auto_close_json(candidate)
    if repaired is None:
        logger.debug("Assistant response has mismatched brackets; not repairing")
        return None

    try:
        parsed = json.loads(repaired)
    except json.JSONDecodeError as exc:
        logger.debug("Repaired assistant response is still invalid JSON: %s", exc)
        return None

    return to_structured_response(parsed)


def parse_assistant_response(content: str) -> AssistantStructuredResponse | None:
    """Parse a model reply into the structured response shape.

    The JSON object is taken from the first ``{`` to the last ``}``; if that
    does not parse, the truncated-output repair is attempted. ``None`` means
    no structured response could be recovered.
    """
    sanitized = strip_json_wrapper(content)
    start = sanitized.find("{")
    if start < 0:
        return None

    end = sanitized.rfind("}")
    candidate = sanitized[start : end + 1] if end > start else sanitized[start:]

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        logger.debug("Assistant response is not valid JSON; attempting repair")
        return repair_json_fragment(candidate)

    return to_structured_response(parsed)


def to_structured_response(parsed: Any) -> AssistantStructuredResponse | None:
    if not isinstance(parsed, dict):
        return None

    raw_events = parsed.get("events")
    if not isinstance(raw_events, list):
        raw_events = []

    events = []
    for item in raw_events:
        details = _to_event_details(item)
        if details is not None:
            events.append(details)

    return AssistantStructuredResponse(
        summary=clean_string(parsed.get("summary")),
        notes=clean_string(parsed.get("notes")),
        events=tuple(events),
    )


def _to_event_details(value: Any) -> AssistantEventDetails | None:
    if not isinstance(value, dict):
        return None

    title = clean_string(value.get("title"))
    if not title:
        return None

    return AssistantEventDetails(
        title=title,
        time=clean_string(value.get("time")),
        location=clean_string(value.get("location")),
        category=clean_string(value.get("category")),
        description=clean_string(value.get("description")),
        url=clean_string(value.get("url")),
        tags=clean_string_list(value.get("tags")),
    )
