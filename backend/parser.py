import logging

from pydantic import ValidationError

from backend.errors import ResponseParseError
from backend.models import OptimizationResult

logger = logging.getLogger(__name__)


def parse_response(raw_text: str) -> OptimizationResult:
    """Parse Gemini's JSON text into an OptimizationResult.

    Validation is strict and structural only: every field must be present with
    its exact JSON type. Field contents (impact levels, score range) are left to
    the response schema declared on the request.
    """
    try:
        return OptimizationResult.model_validate_json(raw_text, strict=True)
    except ValidationError as e:
        if any(err["type"] == "json_invalid" for err in e.errors()):
            logger.error("AI response is not valid JSON: %.200s", raw_text)
            raise ResponseParseError(f"AI response was not valid JSON: {e.errors()[0]['msg']}") from e

        logger.error("AI response did not match the report schema: %s", e)
        raise ResponseParseError(
            f"AI response did not match the expected schema ({e.error_count()} errors)"
        ) from e
