"""Pydantic models for the generateContent request and response bodies."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    parts: list[Part] = []
    role: str | None = None


class Candidate(BaseModel):
    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")

    model_config = {"populate_by_name": True}


class UsageMetadata(BaseModel):
    prompt_token_count: int = Field(default=0, alias="promptTokenCount")
    candidates_token_count: int = Field(default=0, alias="candidatesTokenCount")

    model_config = {"populate_by_name": True}


class GenerateContentRequest(BaseModel):
    """Body of one generateContent POST."""

    contents: list[Content]
    system_instruction: Content = Field(alias="systemInstruction")

    model_config = {"populate_by_name": True}

    @classmethod
    def build(cls, user_payload: str, task_instruction: str) -> GenerateContentRequest:
        return cls(
            contents=[Content(parts=[Part(text=user_payload)])],
            system_instruction=Content(parts=[Part(text=task_instruction)]),
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class GenerateContentResponse(BaseModel):
    """Body returned by generateContent. Every field along the text path is optional."""

    candidates: list[Candidate] | None = None
    usage_metadata: UsageMetadata | None = Field(default=None, alias="usageMetadata")

    model_config = {"populate_by_name": True}

    def first_text(self) -> str | None:
        """Return ``candidates[0].content.parts[0].text`` or None if any step is missing."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text or None
