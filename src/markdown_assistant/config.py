"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from markdown_assistant.models.editor import Tone

API_KEY_ENV = "GEMINI_API_KEY"
CONFIG_PATH_ENV = "MARKDOWN_ASSISTANT_CONFIG"

DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class GeminiConfig:
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    max_retries: int = 3
    timeout: int = 60

    def __post_init__(self) -> None:
        if not 0 <= self.max_retries <= 10:
            raise ValueError(f"max_retries must be between 0 and 10, got {self.max_retries}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be at least 1 second, got {self.timeout}")


@dataclass(frozen=True)
class EditorConfig:
    min_selection_chars: int = 5
    default_tone: str = "professional"
    status_reset_seconds: float = 5.0  # 0 keeps success messages until replaced

    def __post_init__(self) -> None:
        if self.min_selection_chars < 1:
            raise ValueError(
                f"min_selection_chars must be at least 1, got {self.min_selection_chars}"
            )
        if self.default_tone not in {t.value for t in Tone}:
            raise ValueError(f"default_tone must be one of the known tones, got {self.default_tone!r}")
        if self.status_reset_seconds < 0:
            raise ValueError(
                f"status_reset_seconds must not be negative, got {self.status_reset_seconds}"
            )


@dataclass(frozen=True)
class AppConfig:
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    api_key: str = field(default="", repr=False)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    The API key is never read from YAML; it comes from ``GEMINI_API_KEY``.
    """
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV) or None
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        gemini=GeminiConfig(**raw.get("gemini", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        api_key=os.environ.get(API_KEY_ENV, ""),
    )
