"""Shared pytest fixtures."""

from __future__ import annotations

import base64
import copy
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from backend.models import AnalysisInput, FamilyCategory  # noqa: E402


PNG_1X1_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
PNG_1X1_BYTES = base64.b64decode(PNG_1X1_B64)
PNG_DATA_URL = f"data:image/png;base64,{PNG_1X1_B64}"

FURNITURE_REPORT = {
    "isOverModeled": True,
    "complexityScore": 82,
    "polygonEstimate": "High (>5000)",
    "unusedParams": ["Comments"],
    "suggestions": [
        {
            "title": "Reduce screw detail",
            "description": "Replace modeled screws with symbolic lines in plan.",
            "impact": "High",
            "type": "Simplification",
        }
    ],
    "lodRecommendations": "Use LOD 200 for plan views.",
    "symbolicCandidates": ["Screws"],
    "overallAnalysis": "Overmodeled furniture piece.",
}


class FakeGeminiClient:
    """Stands in for GeminiClient; records requests and replays one answer."""

    def __init__(self, response: str | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list = []

    def generate(self, request) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def furniture_report() -> dict:
    return copy.deepcopy(FURNITURE_REPORT)


@pytest.fixture
def furniture_input() -> AnalysisInput:
    return AnalysisInput(
        category=FamilyCategory.FURNITURE,
        file_size_mb=2.5,
        image=PNG_DATA_URL,
        additional_context="",
    )


@pytest.fixture
def furniture_payload() -> dict:
    return {
        "category": "Furniture",
        "fileSizeMB": 2.5,
        "image": PNG_DATA_URL,
        "additionalContext": "",
    }
