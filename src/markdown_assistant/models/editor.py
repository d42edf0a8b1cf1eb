"""Editor state value types: tone, selection span and status line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

READY_MESSAGE = "Ready."


class Tone(str, Enum):
    """Writing-style targets offered by the Change Tone operation."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    PERSUASIVE = "persuasive"
    WITTY = "witty"

    @property
    def label(self) -> str:
        return self.value.capitalize()


DEFAULT_TONE = Tone.PROFESSIONAL


@dataclass(frozen=True)
class Selection:
    """Half-open character range ``[start, end)`` over the document."""

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid selection [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def fits(self, document: str) -> bool:
        return self.end <= len(document)

    def clamp(self, document: str) -> Selection:
        """Shrink the span so it lies within ``document``."""
        size = len(document)
        return Selection(min(self.start, size), min(self.end, size))

    def text_in(self, document: str) -> str:
        return document[self.start : self.end]

    def replace_in(self, document: str, replacement: str) -> str:
        return document[: self.start] + replacement + document[self.end :]

    @classmethod
    def find(cls, document: str, passage: str, occurrence: int = 1) -> Selection | None:
        """Locate the n-th occurrence of ``passage`` in ``document``.

        Returns None when the passage is empty or does not occur often enough.
        """
        if not passage or occurrence < 1:
            return None
        index = -1
        for _ in range(occurrence):
            index = document.find(passage, index + 1)
            if index == -1:
                return None
        return cls(index, index + len(passage))


@dataclass(frozen=True)
class Status:
    """The status line: a message plus error and busy flags."""

    message: str = READY_MESSAGE
    is_error: bool = False
    busy: bool = False
