"""Streamlit Web UI for markdown-assistant.

Left pane: markdown editor. Right pane: live preview or a generated summary.
Toolbar: Change Tone, Refine, Fix Grammar, Summarize, Continue.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the client config can read it
for key in ("GEMINI_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from markdown_assistant.clients.gemini_client import GeminiClient
from markdown_assistant.config import load_config
from markdown_assistant.models.editor import Selection, Tone
from markdown_assistant.pipeline.controller import EditorController
from markdown_assistant.pipeline.tasks import TASKS, Operation
from markdown_assistant.preview.renderer import render_page

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="AI-Powered Markdown Editor",
    page_icon=":memo:",
    layout="wide",
)

EDITOR_KEY = "editor_text"
PREVIEW_HEIGHT = 720


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_controller() -> EditorController:
    """Build the controller once per browser session."""
    if "controller" not in st.session_state:
        config = load_config()
        if not config.api_key:
            logger.warning("GEMINI_API_KEY is not set; generation calls will be rejected")
        client = GeminiClient.from_config(config)
        st.session_state.controller = EditorController.from_config(client, config)
        st.session_state[EDITOR_KEY] = st.session_state.controller.document
    return st.session_state.controller


def _on_edit() -> None:
    _get_controller().set_document(st.session_state[EDITOR_KEY])


def _on_tone_change() -> None:
    _get_controller().set_tone(st.session_state.tone_select)


def _on_select() -> None:
    controller = _get_controller()
    passage = st.session_state.get("selection_passage", "")
    occurrence = int(st.session_state.get("selection_occurrence", 1))
    selection = Selection.find(controller.document, passage, occurrence)
    if selection is None:
        st.session_state.selection_error = "Passage not found in the document."
        controller.select(0, 0)
        return
    st.session_state.pop("selection_error", None)
    controller.select(selection.start, selection.end)


def _run_operation(operation: Operation) -> None:
    controller = _get_controller()
    try:
        asyncio.run(controller.run(operation))
    except Exception:
        logger.exception("Operation %s failed unexpectedly", operation.value)
        st.session_state.unexpected_error = "Something went wrong. Please try again."
        return
    st.session_state[EDITOR_KEY] = controller.document


def _on_close_summary() -> None:
    _get_controller().close_summary()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

controller = _get_controller()

with st.sidebar:
    st.title("Markdown Assistant")
    st.caption("AI-assisted markdown editing")

    st.divider()
    st.subheader("Selection")
    st.text_input(
        "Passage to operate on",
        key="selection_passage",
        placeholder="Paste the text you want to rewrite...",
        help="Change Tone and Refine act on this passage inside the document.",
    )
    st.number_input("Occurrence", min_value=1, value=1, step=1, key="selection_occurrence")
    st.button("Select passage", on_click=_on_select)
    if "selection_error" in st.session_state:
        st.error(st.session_state.selection_error)
    elif not controller.selection.is_empty:
        st.caption(
            f"Selected [{controller.selection.start}, {controller.selection.end}) "
            f"- {controller.selection.length} chars"
        )

    st.divider()
    usage = st.session_state.setdefault("token_usage", {"input": 0, "output": 0})
    summary = controller.client.get_token_summary()
    usage["input"] += summary["input"]
    usage["output"] += summary["output"]
    st.caption(f"Tokens used: {usage['input']} in / {usage['output']} out")

# Toolbar
busy = controller.busy
toolbar = st.columns([1.2, 1.2, 1, 1.2, 1.2, 1, 3])
with toolbar[0]:
    st.button(
        TASKS[Operation.CHANGE_TONE].label,
        on_click=_run_operation,
        args=(Operation.CHANGE_TONE,),
        disabled=busy,
    )
with toolbar[1]:
    st.selectbox(
        "Tone",
        [t.value for t in Tone],
        index=[t.value for t in Tone].index(controller.tone.value),
        format_func=lambda v: Tone(v).label,
        key="tone_select",
        on_change=_on_tone_change,
        disabled=busy,
        label_visibility="collapsed",
    )
for column, operation in zip(
    toolbar[2:6],
    (
        Operation.REFINE_SELECTION,
        Operation.FIX_GRAMMAR,
        Operation.SUMMARIZE,
        Operation.CONTINUE_WRITING,
    ),
):
    with column:
        st.button(
            TASKS[operation].label,
            on_click=_run_operation,
            args=(operation,),
            disabled=busy,
        )
with toolbar[6]:
    status = controller.status
    if "unexpected_error" in st.session_state:
        st.error(st.session_state.pop("unexpected_error"))
    elif status.is_error:
        st.error(status.message)
    else:
        st.caption(status.message)

# Editor and preview
editor_col, preview_col = st.columns(2)

with editor_col:
    st.text_area(
        "Markdown",
        key=EDITOR_KEY,
        on_change=_on_edit,
        height=PREVIEW_HEIGHT,
        placeholder="Type your Markdown here...",
        label_visibility="collapsed",
    )

with preview_col:
    if controller.showing_summary:
        st.button("×", on_click=_on_close_summary, help="Close Summary")
    components.html(
        render_page(controller.preview_html, summary=controller.showing_summary),
        height=PREVIEW_HEIGHT,
        scrolling=True,
    )

st.caption("© 2024 AI-Powered Markdown Editor")
