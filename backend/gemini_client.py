import base64
import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import types

from backend import config
from backend.errors import AnalysisServiceError, ConfigurationError, EmptyResponseError
from backend.prompt import AnalysisRequest

logger = logging.getLogger(__name__)


class GeminiClient:
    """Send one AnalysisRequest to Gemini and return the raw response text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model or config.GEMINI_MODEL
        if client is None:
            api_key = api_key or config.GEMINI_API_KEY
            if not api_key:
                raise ConfigurationError(
                    "GEMINI_API_KEY is not set. Add it to the backend environment or .env file."
                )
            client = genai.Client(api_key=api_key)
        self._client = client

    def build_contents(self, request: AnalysisRequest) -> list:
        contents = [types.Part.from_text(text=request.prompt)]
        if request.image is not None:
            contents.append(
                types.Part.from_bytes(
                    data=base64.b64decode(request.image.data),
                    mime_type=request.image.mime_type,
                )
            )
        return contents

    def build_config(self, request: AnalysisRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type=request.response_mime_type,
            response_schema=request.response_schema,
        )

    def generate(self, request: AnalysisRequest) -> str:
        contents = self.build_contents(request)
        logger.info(
            "Sending request to Gemini (model=%s, image=%s, prompt=%d chars)",
            self.model,
            request.image.mime_type if request.image else "none",
            len(request.prompt),
        )

        start_time = time.time()
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=self.build_config(request),
            )
        except Exception as e:
            logger.error("Gemini analysis failed: %s", e)
            raise AnalysisServiceError(f"Gemini request failed: {e}") from e

        duration = time.time() - start_time
        text = response.text
        if not text:
            logger.error("Gemini returned an empty response after %.2fs", duration)
            raise EmptyResponseError("Empty response from AI")

        logger.info("Received %d chars from Gemini in %.2fs", len(text), duration)
        return text
