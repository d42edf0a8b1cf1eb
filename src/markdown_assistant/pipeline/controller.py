"""Editor/preview state controller - coordinates the document, selection and AI operations."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from markdown_assistant.clients.gemini_client import GeminiClient
from markdown_assistant.config import AppConfig
from markdown_assistant.errors import GenerationError, ValidationError
from markdown_assistant.models.editor import (
    DEFAULT_TONE,
    READY_MESSAGE,
    Selection,
    Status,
    Tone,
)
from markdown_assistant.pipeline.tasks import (
    TASKS,
    Operation,
    build_request,
    check_precondition,
    success_message,
)
from markdown_assistant.preview.renderer import render_preview, summary_markdown

logger = logging.getLogger(__name__)

INITIAL_DOCUMENT_PATH = Path(__file__).parent.parent / "samples" / "syntax_guide.md"

THINKING_MESSAGE = "Thinking..."
STALE_SELECTION_MESSAGE = "The selection changed while the AI was working. Result discarded."


def load_initial_document() -> str:
    """Return the markdown syntax guide the editor starts with."""
    return INITIAL_DOCUMENT_PATH.read_text(encoding="utf-8")


class EditorController:
    """Owns the document, selection, tone, preview and status of one editor.

    At most one generation call is in flight at a time: an operation invoked
    while busy is ignored and returns False without touching the network.
    """

    def __init__(
        self,
        client: GeminiClient,
        *,
        document: str = "",
        tone: Tone | str = DEFAULT_TONE,
        min_selection_chars: int = 5,
        status_reset_seconds: float = 5.0,
        renderer: Callable[[str], str] = render_preview,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.min_selection_chars = min_selection_chars
        self.status_reset_seconds = status_reset_seconds
        self._render = renderer
        self._clock = clock

        self._document = document
        self._selection = Selection()
        self._tone = Tone(tone)
        self._busy = False
        self._status = Status()
        self._status_set_at = clock()

        self._summary_html: str | None = None
        self._live_html: str | None = None
        self._rendered_for: str | None = None

    @classmethod
    def from_config(
        cls,
        client: GeminiClient,
        config: AppConfig,
        document: str | None = None,
        **kwargs,
    ) -> EditorController:
        return cls(
            client,
            document=load_initial_document() if document is None else document,
            tone=config.editor.default_tone,
            min_selection_chars=config.editor.min_selection_chars,
            status_reset_seconds=config.editor.status_reset_seconds,
            **kwargs,
        )

    # --- Document / selection / tone ---

    @property
    def document(self) -> str:
        return self._document

    def set_document(self, text: str) -> None:
        """Replace the document. Clears any summary override and re-bounds the selection."""
        if self._summary_html is not None:
            logger.debug("Document changed, clearing summary override")
        self._summary_html = None
        self._document = text
        self._selection = self._selection.clamp(text)

    @property
    def selection(self) -> Selection:
        return self._selection

    def select(self, start: int, end: int) -> Selection:
        selection = Selection(start, end)
        if not selection.fits(self._document):
            raise ValueError(
                f"Selection [{start}, {end}) exceeds document length {len(self._document)}"
            )
        self._selection = selection
        return selection

    @property
    def selected_text(self) -> str:
        return self._selection.text_in(self._document)

    @property
    def tone(self) -> Tone:
        return self._tone

    def set_tone(self, tone: Tone | str) -> None:
        self._tone = Tone(tone)

    # --- Preview ---

    @property
    def showing_summary(self) -> bool:
        return self._summary_html is not None

    @property
    def preview_html(self) -> str:
        if self._summary_html is not None:
            return self._summary_html
        if self._rendered_for != self._document or self._live_html is None:
            self._live_html = self._render(self._document)
            self._rendered_for = self._document
        return self._live_html

    def close_summary(self) -> None:
        self._summary_html = None

    # --- Status ---

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def status(self) -> Status:
        current = Status(self._status.message, self._status.is_error, self._busy)
        if (
            not current.is_error
            and not current.busy
            and current.message != READY_MESSAGE
            and self.status_reset_seconds > 0
            and self._clock() - self._status_set_at >= self.status_reset_seconds
        ):
            return Status()
        return current

    def _show_status(self, message: str, is_error: bool = False) -> None:
        self._status = Status(message, is_error)
        self._status_set_at = self._clock()

    # --- AI operations ---

    async def change_tone(self) -> bool:
        return await self.run(Operation.CHANGE_TONE)

    async def refine_selection(self) -> bool:
        return await self.run(Operation.REFINE_SELECTION)

    async def fix_grammar(self) -> bool:
        return await self.run(Operation.FIX_GRAMMAR)

    async def summarize(self) -> bool:
        return await self.run(Operation.SUMMARIZE)

    async def continue_writing(self) -> bool:
        return await self.run(Operation.CONTINUE_WRITING)

    async def run(self, operation: Operation) -> bool:
        """Run one AI operation end to end. Returns True when its result was applied."""
        if self._busy:
            logger.info("Ignoring %s: a generation call is already in flight", operation.value)
            return False

        spec = TASKS[operation]
        span = self._selection if spec.uses_selection else None
        source = span.text_in(self._document) if span is not None else self._document
        try:
            text = check_precondition(operation, source, self.min_selection_chars)
        except ValidationError as e:
            self._show_status(str(e), is_error=True)
            return False

        request = build_request(operation, text, self._tone)
        tone = self._tone
        self._busy = True
        self._show_status(THINKING_MESSAGE)
        try:
            result = await self.client.generate(request.payload, request.instruction)
        except GenerationError as e:
            logger.error("%s failed: %s", operation.value, e)
            self._show_status(f"Error: {e}", is_error=True)
            return False
        finally:
            self._busy = False

        try:
            self._apply(operation, result, span, source)
        except ValidationError as e:
            self._show_status(str(e), is_error=True)
            return False
        self._show_status(success_message(operation, tone))
        return True

    def _apply(
        self, operation: Operation, result: str, span: Selection | None, source: str
    ) -> None:
        if span is not None:
            # The span must still cover the exact text that was sent.
            if not span.fits(self._document) or span.text_in(self._document) != source:
                raise ValidationError(STALE_SELECTION_MESSAGE)
            self.set_document(span.replace_in(self._document, result))
            self._selection = Selection(span.start, span.start + len(result))
        elif operation is Operation.FIX_GRAMMAR:
            self.set_document(result)
        elif operation is Operation.SUMMARIZE:
            self._summary_html = self._render(summary_markdown(result))
        elif operation is Operation.CONTINUE_WRITING:
            self.set_document(f"{self._document}\n\n{result}")
