import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend import config
from backend.errors import AnalysisError
from backend.gemini_client import GeminiClient
from backend.models import AnalysisInput, FamilyCategory, OptimizationResult
from backend.parser import parse_response
from backend.prompt import build_request
from backend.tracking import InferenceTracker

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

tracker = InferenceTracker()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Gemini model: %s", config.GEMINI_MODEL)
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not found! /analyze will answer 503 until it is set.")
    tracker.start()
    yield
    tracker.finish()


app = FastAPI(
    title="Revit Family Optimizer API",
    version="1.0.0",
    description="Screenshot-based over-modeling analysis of Revit families using Gemini",
    lifespan=lifespan,
)

# Allow CORS from frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc), "type": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error while handling %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": f"Unexpected error: {exc}", "type": type(exc).__name__},
    )


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    return GeminiClient()


def get_tracker() -> InferenceTracker:
    return tracker


def analyze_family(
    analysis_input: AnalysisInput,
    client: GeminiClient,
    inference_tracker: Optional[InferenceTracker] = None,
) -> OptimizationResult:
    """Build the request, call Gemini once, and parse the report."""
    request = build_request(analysis_input)

    start_time = time.time()
    try:
        raw_response = client.generate(request)
        result = parse_response(raw_response)
    except AnalysisError as e:
        if inference_tracker is not None:
            inference_tracker.log_analysis(analysis_input, time.time() - start_time, error=str(e))
        raise

    duration = time.time() - start_time
    logger.info(
        "Analysis complete in %.2fs: over_modeled=%s score=%s suggestions=%d",
        duration,
        result.is_over_modeled,
        result.complexity_score,
        len(result.suggestions),
    )
    if inference_tracker is not None:
        inference_tracker.log_analysis(analysis_input, duration, result=result)
    return result


@app.post("/analyze")
def analyze(
    payload: AnalysisInput = Body(...),
    client: GeminiClient = Depends(get_gemini_client),
    inference_tracker: InferenceTracker = Depends(get_tracker),
):
    """Analyze one Revit family screenshot and return the optimization report."""
    logger.info(
        "Analysis requested: category=%s size=%sMB image=%s context=%d chars",
        payload.category.value,
        payload.file_size_mb,
        payload.image is not None,
        len(payload.additional_context),
    )
    result = analyze_family(payload, client, inference_tracker)
    return JSONResponse(content=result.to_wire())


@app.get("/categories")
def list_categories():
    return {"categories": [category.value for category in FamilyCategory]}


@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "model": config.GEMINI_MODEL,
        "api_key_configured": bool(config.GEMINI_API_KEY),
        "tracking_enabled": tracker.enabled,
    }


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
