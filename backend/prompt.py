"""Build the Gemini request for one family analysis.

The request is three things: the instruction text, the screenshot (if any) as
an inline attachment, and the response schema Gemini has to fill in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from backend.config import DEFAULT_IMAGE_MIME_TYPE
from backend.data_url import split_data_url
from backend.models import AnalysisInput, Impact, SuggestionType

NO_CONTEXT_PLACEHOLDER = "None provided"
RESPONSE_MIME_TYPE = "application/json"

_RESULT_FIELDS = [
    "isOverModeled",
    "complexityScore",
    "polygonEstimate",
    "unusedParams",
    "suggestions",
    "lodRecommendations",
    "symbolicCandidates",
    "overallAnalysis",
]
_SUGGESTION_FIELDS = ["title", "description", "impact", "type"]

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "isOverModeled": {"type": "BOOLEAN"},
        "complexityScore": {"type": "NUMBER"},
        "polygonEstimate": {"type": "STRING"},
        "unusedParams": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suggestions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "impact": {"type": "STRING", "enum": [i.value for i in Impact]},
                    "type": {"type": "STRING", "enum": [t.value for t in SuggestionType]},
                },
                "required": _SUGGESTION_FIELDS,
                "propertyOrdering": _SUGGESTION_FIELDS,
            },
        },
        "lodRecommendations": {"type": "STRING"},
        "symbolicCandidates": {"type": "ARRAY", "items": {"type": "STRING"}},
        "overallAnalysis": {"type": "STRING"},
    },
    "required": _RESULT_FIELDS,
    "propertyOrdering": _RESULT_FIELDS,
}

PROMPT_TEMPLATE = """\
You are an expert BIM Manager and Revit Family Developer.
Analyze the attached screenshot of a Revit Family and the provided metadata.

Metadata:
- Category: {category}
- Reported File Size: {file_size} MB
- User Context: {context}

Your task is to:
1. Determine if the family is "Over-Modeled" (too complex for general BIM use).
2. Visually estimate the polygon density/count based on the geometry shown.
3. Identify elements that should likely be 2D Symbolic Lines instead of 3D solids.
4. Suggest specific items to delete or simplify for lower LODs (Level of Development).
5. Suggest potential unused parameters common for this category that might be cluttering the family (infer based on standard bad practices if not visible).

Respond with exactly one JSON object and no additional prose, matching this schema:
{{
  "isOverModeled": boolean,
  "complexityScore": number (0-100, where 100 is extremely complex),
  "polygonEstimate": string (e.g., "Low (<1000)", "Medium (1000-5000)", "High (>5000)"),
  "unusedParams": string[] (list of potential unused parameters),
  "suggestions": [
    {{
      "title": string,
      "description": string,
      "impact": {impacts},
      "type": {types}
    }}
  ],
  "lodRecommendations": string (advice on LOD 200 vs 400),
  "symbolicCandidates": string[] (parts of geometry to turn into lines),
  "overallAnalysis": string (brief summary paragraph)
}}
"""


@dataclass(frozen=True)
class InlineImage:
    mime_type: str
    # base64 payload, without the "data:...;base64," prefix
    data: str


@dataclass(frozen=True)
class AnalysisRequest:
    prompt: str
    image: InlineImage | None = None
    response_schema: dict[str, Any] = field(default_factory=lambda: RESPONSE_SCHEMA)
    response_mime_type: str = RESPONSE_MIME_TYPE


def _enum_literal(values) -> str:
    return " | ".join(f'"{v.value}"' for v in values)


def build_prompt(analysis_input: AnalysisInput) -> str:
    context = analysis_input.additional_context
    if not context.strip():
        context = NO_CONTEXT_PLACEHOLDER
    return PROMPT_TEMPLATE.format(
        category=analysis_input.category.value,
        file_size=analysis_input.file_size_mb,
        context=context,
        impacts=_enum_literal(Impact),
        types=_enum_literal(SuggestionType),
    )


def build_inline_image(image: str) -> InlineImage:
    mime_type, payload = split_data_url(image)
    return InlineImage(mime_type=mime_type or DEFAULT_IMAGE_MIME_TYPE, data=payload)


def build_request(analysis_input: AnalysisInput) -> AnalysisRequest:
    image = build_inline_image(analysis_input.image) if analysis_input.image else None
    return AnalysisRequest(prompt=build_prompt(analysis_input), image=image)
