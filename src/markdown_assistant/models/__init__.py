"""Data models for the markdown assistant."""

from markdown_assistant.models.editor import DEFAULT_TONE, Selection, Status, Tone
from markdown_assistant.models.generation import (
    Candidate,
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
    UsageMetadata,
)

__all__ = [
    "Candidate",
    "Content",
    "DEFAULT_TONE",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "Part",
    "Selection",
    "Status",
    "Tone",
    "UsageMetadata",
]
