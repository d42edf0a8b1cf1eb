"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from markdown_assistant.clients.gemini_client import GeminiClient
from markdown_assistant.pipeline.controller import EditorController


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(float(seconds))

    @property
    def total(self) -> float:
        return sum(self.calls)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_gemini_client(sleep_recorder):
    """Factory: GeminiClient whose HTTP traffic is served by ``handler``."""

    def _make(handler, **kwargs) -> GeminiClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GeminiClient("test-key", http_client=http_client, sleep=sleep_recorder, **kwargs)

    return _make


@pytest.fixture
def mock_gemini_client() -> GeminiClient:
    """Create a mock Gemini client."""
    client = AsyncMock(spec=GeminiClient)
    client.generate = AsyncMock(return_value="generated text")
    return client


@pytest.fixture
def make_controller(mock_gemini_client, fake_clock):
    """Factory: EditorController backed by the mock client and fake clock."""

    def _make(document: str = "", **kwargs) -> EditorController:
        kwargs.setdefault("clock", fake_clock)
        return EditorController(mock_gemini_client, document=document, **kwargs)

    return _make
