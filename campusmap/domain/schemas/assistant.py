from typing import Any

from pydantic import BaseModel, ConfigDict


class AssistantEventDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    time: str | None = None
    location: str | None = None
    category: str | None = None
    description: str | None = None
    url: str | None = None
    tags: tuple[str, ...] = ()


class AssistantStructuredResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str | None = None
    notes: str | None = None
    events: tuple[AssistantEventDetails, ...] = ()


_NULLABLE_STRING = {"type": ["string", "null"]}

EVENT_ASSISTANT_RESPONSE_FORMAT: dict[str, Any] = {
    "type": "json_schema",
    "json_schema": {
        "name": "event_assistant_response",
        "strict": True,
        "schema": {
            "type": "object",
            "additionalProperties": False,
            "required": ["summary", "events", "notes"],
            "properties": {
                "summary": {
                    **_NULLABLE_STRING,
                    "description": "High-level sentence summarizing the results for the user.",
                },
                "events": {
                    "type": "array",
                    "description": "List of events that match the user's request.",
                    "items": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": [
                            "title",
                            "time",
                            "location",
                            "category",
                            "tags",
                            "url",
                            "description",
                        ],
                        "properties": {
                            "title": {"type": "string"},
                            "time": {
                                **_NULLABLE_STRING,
                                "description": "Human-friendly date range for the event.",
                            },
                            "location": _NULLABLE_STRING,
                            "category": _NULLABLE_STRING,
                            "tags": {"type": "array", "items": {"type": "string"}},
                            "url": _NULLABLE_STRING,
                            "description": _NULLABLE_STRING,
                        },
                    },
                },
                "notes": {
                    **_NULLABLE_STRING,
                    "description": "Additional remarks or clarifications for the user.",
                },
            },
        },
    },
}
