import base64
import binascii
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.data_url import split_data_url


class FamilyCategory(str, Enum):
    FURNITURE = "Furniture"
    LIGHTING = "Lighting Fixtures"
    PLUMBING = "Plumbing Fixtures"
    SPECIALTY = "Specialty Equipment"
    DOOR = "Doors"
    WINDOW = "Windows"
    GENERIC = "Generic Models"
    MECHANICAL = "Mechanical Equipment"


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SuggestionType(str, Enum):
    DELETION = "Deletion"
    SYMBOLIC = "Symbolic"
    SIMPLIFICATION = "Simplification"
    PARAMETER = "Parameter"


class _WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AnalysisInput(_WireModel):
    """One form submission: what the user tells us about the family."""

    category: FamilyCategory
    file_size_mb: float = Field(alias="fileSizeMB", gt=0, allow_inf_nan=False)
    image: Optional[str] = None
    additional_context: str = ""

    @field_validator("image")
    @classmethod
    def _check_image(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None

        _, payload = split_data_url(value)
        if not payload:
            raise ValueError("Image payload is empty")
        try:
            base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 encoding: {e}") from e
        return value


class Suggestion(_WireModel):
    title: str
    description: str
    # impact/type are constrained by the response schema sent to Gemini, not here
    impact: str
    type: str


class OptimizationResult(_WireModel):
    """Structured report returned by Gemini."""

    is_over_modeled: bool
    complexity_score: Union[int, float]
    polygon_estimate: str
    unused_params: List[str]
    suggestions: List[Suggestion]
    lod_recommendations: str
    symbolic_candidates: List[str]
    overall_analysis: str

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
