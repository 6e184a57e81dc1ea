from __future__ import annotations

import re
import unicodedata
from typing import Any

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_NON_SEARCH = re.compile(r"[^a-z0-9]+")


def normalize_stop_id(name: str) -> str:
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    replaced = stripped.replace("&", "and").replace("@", " at ").replace("+", " plus ")
    return _NON_ALNUM.sub("-", replaced).strip("-").lower()


def normalize_for_search(value: str) -> str:
    lowered = value.lower().replace("&", "and")
    return _NON_SEARCH.sub(" ", lowered).strip()


def clean_string(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def clean_string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    cleaned = (item.strip() for item in value if isinstance(item, str))
    return tuple(item for item in cleaned if item)


def parse_delimited(value: str | None, delimiter: str) -> tuple[str, ...]:
    if not value:
        return ()
    segments = (segment.strip() for segment in value.split(delimiter))
    return tuple(segment for segment in segments if segment)


def parse_boolean(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in {"true", "yes"}
