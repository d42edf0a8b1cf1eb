"""Tests for editor value types and the generateContent schema."""

import pydantic
import pytest

from markdown_assistant.models import (
    GenerateContentRequest,
    GenerateContentResponse,
    Selection,
    Tone,
)


class TestTone:
    def test_members(self):
        assert [t.value for t in Tone] == [
            "professional",
            "casual",
            "academic",
            "persuasive",
            "witty",
        ]

    def test_label(self):
        assert Tone.CASUAL.label == "Casual"


class TestSelection:
    def test_invalid_spans_rejected(self):
        with pytest.raises(ValueError):
            Selection(-1, 2)
        with pytest.raises(ValueError):
            Selection(5, 2)

    def test_replace_in(self):
        assert Selection(0, 5).replace_in("Hello world", "Hey there") == "Hey there world"

    def test_fits_and_clamp(self):
        span = Selection(3, 10)
        assert not span.fits("short")
        assert span.clamp("short") == Selection(3, 5)

    def test_find_occurrences(self):
        doc = "one two one two"
        assert Selection.find(doc, "two") == Selection(4, 7)
        assert Selection.find(doc, "two", occurrence=2) == Selection(12, 15)
        assert Selection.find(doc, "two", occurrence=3) is None
        assert Selection.find(doc, "three") is None
        assert Selection.find(doc, "") is None


class TestGenerateContentRequest:
    def test_to_json_uses_wire_names(self):
        body = GenerateContentRequest.build("payload", "instruction").to_json()
        assert body == {
            "contents": [{"parts": [{"text": "payload"}]}],
            "systemInstruction": {"parts": [{"text": "instruction"}]},
        }


class TestGenerateContentResponse:
    def test_first_text(self):
        parsed = GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"parts": [{"text": "hi"}, {"text": "ignored"}]}}]}
        )
        assert parsed.first_text() == "hi"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": None},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": [{}]}}]},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"promptFeedback": {"blockReason": "SAFETY"}},
        ],
    )
    def test_missing_path_yields_none(self, body):
        assert GenerateContentResponse.model_validate(body).first_text() is None

    def test_usage_metadata_aliases(self):
        parsed = GenerateContentResponse.model_validate(
            {"usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 4}}
        )
        assert parsed.usage_metadata.prompt_token_count == 3
        assert parsed.usage_metadata.candidates_token_count == 4

    def test_wrong_shape_raises(self):
        with pytest.raises(pydantic.ValidationError):
            GenerateContentResponse.model_validate({"candidates": "nope"})
