"""Markdown to HTML conversion for the preview pane."""

from __future__ import annotations

import html
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markdown_it import MarkdownIt
from markupsafe import Markup
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from markdown_assistant.errors import RenderError

logger = logging.getLogger(__name__)

BASE_TEMPLATE_DIR = Path(__file__).parent

SUMMARY_HEADING = "## Document Summary ✨"

_MARKDOWN_PARSER: MarkdownIt | None = None


def _build_parser() -> MarkdownIt:
    # GitHub-flavored: tables, strikethrough, task lists; single newlines become <br>.
    global _MARKDOWN_PARSER
    if _MARKDOWN_PARSER is None:
        parser = MarkdownIt("commonmark", {"html": True, "breaks": True})
        parser.enable("table")
        parser.enable("strikethrough")
        parser.use(tasklists_plugin)
        parser.use(footnote_plugin)
        parser.use(deflist_plugin)
        _MARKDOWN_PARSER = parser
    return _MARKDOWN_PARSER


def markdown_to_html(md_text: str) -> str:
    """Convert markdown to an HTML fragment, raising RenderError on parser failure."""
    try:
        return _build_parser().render(md_text)
    except Exception as e:
        raise RenderError(str(e)) from e


def render_preview(md_text: str) -> str:
    """Render the document for the preview pane. Never raises."""
    try:
        return markdown_to_html(md_text)
    except RenderError as e:
        logger.warning("Markdown rendering failed: %s", e)
        return f'<p class="render-error">Error parsing markdown: {html.escape(str(e))}</p>'


def summary_markdown(summary_text: str) -> str:
    """Markdown source of the preview override block for a generated summary."""
    return f"{SUMMARY_HEADING}\n\n{summary_text}"


def render_page(body_html: str, *, summary: bool = False, title: str = "Preview") -> str:
    """Wrap a preview fragment in the styled preview frame."""
    env = Environment(
        loader=FileSystemLoader(str(BASE_TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("preview.html")
    return template.render(title=title, summary=summary, body=Markup(body_html))
