"""Gemini generateContent wrapper with async support and retry logic."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
import pydantic
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from markdown_assistant.config import DEFAULT_API_BASE, DEFAULT_MODEL, AppConfig
from markdown_assistant.errors import GenerationError, TransientGenerationError
from markdown_assistant.models.generation import (
    GenerateContentRequest,
    GenerateContentResponse,
)

logger = logging.getLogger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "API call failed. Retrying in %ss... (Attempt %d): %s",
        f"{delay:g}",
        retry_state.attempt_number,
        retry_state.outcome.exception() if retry_state.outcome else None,
    )


class GeminiClient:
    """Async Gemini REST client with exponential-backoff retries.

    A generation call makes up to ``max_retries + 1`` POSTs, sleeping
    ``2**i`` seconds before retry ``i``.
    """

    def __init__(
        self,
        api_key: str = "",
        *,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        max_retries: int = 3,
        timeout: float | None = 60.0,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.max_retries = max_retries
        self.timeout = timeout
        self._http_client = http_client
        self._sleep = sleep
        self._token_log: list[tuple[str, int, int]] = []  # (model, prompt_tokens, candidate_tokens)

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> GeminiClient:
        return cls(
            config.api_key,
            model=config.gemini.model,
            api_base=config.gemini.api_base,
            max_retries=config.gemini.max_retries,
            timeout=config.gemini.timeout,
            **kwargs,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    async def _post(self, body: dict) -> httpx.Response:
        kwargs = {
            "params": {"key": self.api_key},
            "json": body,
            "headers": {"Content-Type": "application/json"},
        }
        if self._http_client is not None:
            # An injected client still gets the per-attempt timeout.
            return await self._http_client.post(self.endpoint, timeout=self.timeout, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint, **kwargs)

    async def _call_api(self, user_payload: str, task_instruction: str) -> str:
        """Make a single attempt. Every failure surfaces as TransientGenerationError."""
        body = GenerateContentRequest.build(user_payload, task_instruction).to_json()
        try:
            response = await self._post(body)
        except httpx.HTTPError as e:
            raise TransientGenerationError(f"Transport error: {e}") from e

        if not response.is_success:
            raise TransientGenerationError(f"HTTP error! status: {response.status_code}")

        try:
            parsed = GenerateContentResponse.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as e:
            raise TransientGenerationError("Malformed response body") from e

        text = parsed.first_text()
        if not text:
            logger.error("Gemini API Error: No text content in response.")
            raise TransientGenerationError(
                "Failed to generate content. The model returned an empty response."
            )

        usage = parsed.usage_metadata
        if usage is not None:
            logger.debug(
                "LLM response: %d prompt, %d candidate tokens",
                usage.prompt_token_count,
                usage.candidates_token_count,
            )
            self._token_log.append(
                (self.model, usage.prompt_token_count, usage.candidates_token_count)
            )
        return text

    async def generate(self, user_payload: str, task_instruction: str) -> str:
        """Send the payload with a system instruction and return the generated text."""
        logger.debug("LLM call: model=%s, payload=%d chars", self.model, len(user_payload))
        attempts = self.max_retries + 1
        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, exp_base=2),
            retry=retry_if_exception_type(TransientGenerationError),
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        text = ""
        try:
            async for attempt in retrying:
                with attempt:
                    text = await self._call_api(user_payload, task_instruction)
        except TransientGenerationError as e:
            logger.error("Gemini API failed after multiple retries", exc_info=True)
            raise GenerationError(
                f"AI generation failed after {attempts} attempts.", last_error=e
            ) from e
        return text

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
