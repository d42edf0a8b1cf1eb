"""Prompt construction and precondition checks for the five AI operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from markdown_assistant.errors import ValidationError
from markdown_assistant.models.editor import DEFAULT_TONE, Tone

TONE_SYSTEM = (
    "You are a style transformer. Rewrite the user's selected text in a **{tone}** tone. "
    "Maintain the original meaning. Output only the rewritten text."
)

REFINE_SYSTEM = (
    "You are a professional editor. Rephrase and refine the user's selected text to be "
    "clearer, more engaging, and more professional. Maintain the original meaning. "
    "Output only the refined text."
)

GRAMMAR_SYSTEM = (
    "You are a rigorous proofreading and style checker. Review the user's provided document. "
    "Fix all grammatical errors, spelling mistakes, and improve sentence flow and professional "
    "tone. Preserve the markdown structure (headings, lists, blockquotes) exactly. "
    "Output only the final corrected markdown text."
)

SUMMARY_SYSTEM = (
    "You are a professional summarization tool. Provide a concise, professional summary of "
    "the user's provided document in a paragraph or two. Output only the summary text, "
    "do not add prefixes or titles."
)

CONTINUE_SYSTEM = (
    "You are a writing assistant. Continue the user's markdown document naturally from where "
    "it ends, matching its voice, style, and formatting. Do not repeat the existing text. "
    "Output only the continuation."
)


class Operation(str, Enum):
    CHANGE_TONE = "change_tone"
    REFINE_SELECTION = "refine_selection"
    FIX_GRAMMAR = "fix_grammar"
    SUMMARIZE = "summarize"
    CONTINUE_WRITING = "continue_writing"


@dataclass(frozen=True)
class TaskSpec:
    """Static description of one operation."""

    label: str
    system: str
    query: str
    uses_selection: bool
    precondition_message: str
    success_message: str


TASKS: dict[Operation, TaskSpec] = {
    Operation.CHANGE_TONE: TaskSpec(
        label="🎭 Change Tone",
        system=TONE_SYSTEM,
        query="Rewrite the following text in a {tone} tone:\n\n{text}",
        uses_selection=True,
        precondition_message="Please select text (at least {min_chars} characters) to change the tone.",
        success_message="Tone changed to '{tone}' successfully.",
    ),
    Operation.REFINE_SELECTION: TaskSpec(
        label="✏️ Refine",
        system=REFINE_SYSTEM,
        query="Refine the following text:\n\n{text}",
        uses_selection=True,
        precondition_message=(
            "Please select a larger block of text (at least {min_chars} characters) to refine."
        ),
        success_message="Selection refined successfully.",
    ),
    Operation.FIX_GRAMMAR: TaskSpec(
        label="🧐 Fix Grammar",
        system=GRAMMAR_SYSTEM,
        query="Fix grammar and flow in the following document:\n\n{text}",
        uses_selection=False,
        precondition_message="Editor is empty. Nothing to fix.",
        success_message="Grammar and flow corrected successfully.",
    ),
    Operation.SUMMARIZE: TaskSpec(
        label="✨ Summarize",
        system=SUMMARY_SYSTEM,
        query="Summarize the following document:\n\n{text}",
        uses_selection=False,
        precondition_message="Editor is empty. Nothing to summarize.",
        success_message="Summary generated and displayed in Preview. Click × to close.",
    ),
    Operation.CONTINUE_WRITING: TaskSpec(
        label="🖋️ Continue",
        system=CONTINUE_SYSTEM,
        query="Continue writing the following document:\n\n{text}",
        uses_selection=False,
        precondition_message="Editor is empty. Nothing to continue.",
        success_message="Continued writing successfully.",
    ),
}


@dataclass(frozen=True)
class TaskRequest:
    """Instruction and payload for one generation call."""

    operation: Operation
    instruction: str
    payload: str


def check_precondition(operation: Operation, source_text: str, min_selection_chars: int = 5) -> str:
    """Return the trimmed source text or raise ValidationError.

    Selection operations need at least ``min_selection_chars`` trimmed
    characters; document operations need any non-whitespace text.
    """
    spec = TASKS[operation]
    text = source_text.strip()
    required = min_selection_chars if spec.uses_selection else 1
    if len(text) < required:
        raise ValidationError(spec.precondition_message.format(min_chars=min_selection_chars))
    return text


def build_request(operation: Operation, text: str, tone: Tone = DEFAULT_TONE) -> TaskRequest:
    spec = TASKS[operation]
    tone_value = Tone(tone).value
    return TaskRequest(
        operation=operation,
        instruction=spec.system.replace("{tone}", tone_value),
        payload=spec.query.format(tone=tone_value, text=text),
    )


def success_message(operation: Operation, tone: Tone = DEFAULT_TONE) -> str:
    return TASKS[operation].success_message.format(tone=Tone(tone).value)
