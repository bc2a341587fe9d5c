"""HTTP client for the analysis backend."""
import os

import dotenv
import requests
from pydantic import ValidationError

from backend.models import AnalysisInput, OptimizationResult

dotenv.load_dotenv('.env')
API_URL = os.environ.get('API_URL', 'http://localhost:8000')


class AnalysisFailed(Exception):
    """Raised when the backend could not produce a report."""


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        if body.get("error"):
            return str(body["error"])

        # FastAPI request validation errors
        detail = body.get("detail")
        if isinstance(detail, list) and detail:
            first = detail[0]
            field = ".".join(str(part) for part in first.get("loc", [])[1:])
            prefix = f"Invalid input ({field})" if field else "Invalid input"
            return f"{prefix}: {first.get('msg', 'validation error')}"
        if detail:
            return str(detail)

    return f"Analysis failed with status {response.status_code}"


def analyze(analysis_input: AnalysisInput, api_url: str = None) -> OptimizationResult:
    """Submit one analysis and wait for the report."""
    payload = analysis_input.model_dump(mode="json", by_alias=True)
    try:
        response = requests.post(f"{api_url or API_URL}/analyze", json=payload)
    except requests.exceptions.RequestException as e:
        raise AnalysisFailed(f"Network error: {e}") from e

    if response.status_code != 200:
        raise AnalysisFailed(_error_message(response))

    try:
        return OptimizationResult.model_validate_json(response.text, strict=True)
    except ValidationError as e:
        raise AnalysisFailed(
            f"Could not read the analysis report ({e.error_count()} validation errors)"
        ) from e


def fetch_health(api_url: str = None) -> dict:
    response = requests.get(f"{api_url or API_URL}/health")
    response.raise_for_status()
    return response.json()


def fetch_categories(api_url: str = None) -> list:
    response = requests.get(f"{api_url or API_URL}/categories")
    response.raise_for_status()
    return response.json().get("categories", [])
