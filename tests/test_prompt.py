"""Tests for building the Gemini request."""

from __future__ import annotations

import pytest

from backend.models import AnalysisInput, FamilyCategory, Impact, SuggestionType
from backend.prompt import (
    NO_CONTEXT_PLACEHOLDER,
    RESPONSE_MIME_TYPE,
    RESPONSE_SCHEMA,
    build_prompt,
    build_request,
)
from conftest import PNG_1X1_B64, PNG_DATA_URL


@pytest.mark.parametrize("category", list(FamilyCategory))
@pytest.mark.parametrize("context", ["", "   ", "Contains 50 visibility parameters"])
def test_prompt_interpolates_metadata(category: FamilyCategory, context: str) -> None:
    analysis_input = AnalysisInput(category=category, file_size_mb=3.75, additional_context=context)

    prompt = build_prompt(analysis_input)

    assert f"Category: {category.value}" in prompt
    assert "3.75 MB" in prompt
    if context.strip():
        assert f"User Context: {context}" in prompt
        assert NO_CONTEXT_PLACEHOLDER not in prompt
    else:
        assert f"User Context: {NO_CONTEXT_PLACEHOLDER}" in prompt


def test_prompt_lists_the_five_sub_analyses(furniture_input: AnalysisInput) -> None:
    prompt = build_prompt(furniture_input)
    assert "Over-Modeled" in prompt
    assert "polygon density" in prompt
    assert "2D Symbolic Lines" in prompt
    assert "lower LODs" in prompt
    assert "unused parameters" in prompt
    assert "exactly one JSON object and no additional prose" in prompt
    assert '"High" | "Medium" | "Low"' in prompt


def test_request_without_image_has_no_attachment() -> None:
    analysis_input = AnalysisInput(category=FamilyCategory.WINDOW, file_size_mb=0.5)
    request = build_request(analysis_input)
    assert request.image is None
    assert request.response_mime_type == RESPONSE_MIME_TYPE


def test_request_with_data_url_strips_encoding_prefix(furniture_input: AnalysisInput) -> None:
    request = build_request(furniture_input)
    assert request.image is not None
    assert request.image.data == PNG_1X1_B64
    assert "data:" not in request.image.data
    assert "base64," not in request.image.data
    assert request.image.mime_type == "image/png"


def test_request_uses_declared_mime_type() -> None:
    analysis_input = AnalysisInput(
        category=FamilyCategory.LIGHTING,
        file_size_mb=1.2,
        image=f"data:image/jpeg;base64,{PNG_1X1_B64}",
    )
    assert build_request(analysis_input).image.mime_type == "image/jpeg"


def test_request_defaults_bare_payload_to_png() -> None:
    analysis_input = AnalysisInput(
        category=FamilyCategory.LIGHTING, file_size_mb=1.2, image=PNG_1X1_B64
    )
    image = build_request(analysis_input).image
    assert image.mime_type == "image/png"
    assert image.data == PNG_1X1_B64


def test_request_carries_prompt_and_schema(furniture_input: AnalysisInput) -> None:
    request = build_request(furniture_input)
    assert request.prompt == build_prompt(furniture_input)
    assert request.response_schema is RESPONSE_SCHEMA
    assert PNG_DATA_URL not in request.prompt


def test_response_schema_declares_report_shape() -> None:
    properties = RESPONSE_SCHEMA["properties"]
    assert RESPONSE_SCHEMA["type"] == "OBJECT"
    assert set(RESPONSE_SCHEMA["required"]) == set(properties)
    assert properties["isOverModeled"] == {"type": "BOOLEAN"}
    assert properties["complexityScore"] == {"type": "NUMBER"}
    assert properties["unusedParams"]["items"] == {"type": "STRING"}
    assert properties["symbolicCandidates"]["items"] == {"type": "STRING"}

    suggestion = properties["suggestions"]["items"]
    assert suggestion["required"] == ["title", "description", "impact", "type"]
    assert suggestion["properties"]["impact"]["enum"] == [i.value for i in Impact]
    assert suggestion["properties"]["type"]["enum"] == [
        "Deletion",
        "Symbolic",
        "Simplification",
        "Parameter",
    ]
    assert [t.value for t in SuggestionType] == suggestion["properties"]["type"]["enum"]
