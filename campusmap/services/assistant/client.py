from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence
from zoneinfo import ZoneInfo

from openai import OpenAI

from campusmap.config import settings
from campusmap.core.env import get_openai_api_key
from campusmap.domain.schemas.assistant import (
    EVENT_ASSISTANT_RESPONSE_FORMAT,
    AssistantStructuredResponse,
)
from campusmap.domain.schemas.building import Building
from campusmap.domain.schemas.event import CanonicalEvent
from campusmap.services.assistant.context import (
    build_events_snapshot,
    build_system_prompt,
    summarize_clusters,
)
from campusmap.services.assistant.repair import parse_assistant_response
from campusmap.services.geo.aggregate import aggregate_by_location

logger = logging.getLogger(__name__)

CHAT_ROLES = {"user", "assistant"}


@dataclass(frozen=True)
class AssistantReply:
    content: str
    structured: AssistantStructuredResponse | None


def _get_client() -> OpenAI:
    return OpenAI(api_key=get_openai_api_key())


def _clean_messages(messages: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    cleaned = []
    for message in messages:
        role = message.get("role")
        content = message.get("content")
        if role not in CHAT_ROLES or not isinstance(content, str):
            continue
        cleaned.append({"role": role, "content": content})
    return cleaned


def ask_event_assistant(
    messages: Iterable[dict[str, Any]],
    events: Iterable[CanonicalEvent],
    scraped_at: str | None = None,
    client: OpenAI | None = None,
    now: datetime | None = None,
    buildings: Sequence[Building] = (),
) -> AssistantReply:
    client = client or _get_client()
    now = (now or datetime.now(tz=timezone.utc)).astimezone(ZoneInfo(settings.CAMPUS_TIME_ZONE))
    events = list(events)
    snapshot = build_events_snapshot(events, scraped_at)
    locations = summarize_clusters(aggregate_by_location(events, buildings))

    response = client.chat.completions.create(
        model=settings.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": build_system_prompt(snapshot, now, locations)},
            *_clean_messages(messages),
        ],
        response_format=EVENT_ASSISTANT_RESPONSE_FORMAT,
        temperature=settings.ASSISTANT_TEMPERATURE,
        max_tokens=settings.ASSISTANT_MAX_OUTPUT_TOKENS,
    )

    content = response.choices[0].message.content or ""
    structured = parse_assistant_response(content)
    if structured is None:
        logger.warning("Assistant reply could not be parsed into a structured response")
    return AssistantReply(content=content, structured=structured)
