"""Exception hierarchy shared by the client, renderer and controller."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for every error raised by markdown-assistant."""


class ValidationError(EditorError):
    """An operation's precondition was not met (selection too short, empty document)."""


class TransientGenerationError(EditorError):
    """A single generation attempt failed and may be retried."""


class GenerationError(EditorError):
    """A generation call failed after exhausting its retry budget."""

    def __init__(self, message: str, last_error: BaseException | None = None):
        super().__init__(message)
        self.last_error = last_error


class RenderError(EditorError):
    """The markdown parser failed to convert a document."""
