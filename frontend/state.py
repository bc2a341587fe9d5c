"""Analysis lifecycle for one browser session.

The session holds exactly one of Idle, Loading, Success or Failure. Every
transition replaces the whole value, so a session can never be loading and
showing a report at the same time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from backend.models import AnalysisInput, OptimizationResult
from frontend.api_client import AnalysisFailed

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred during analysis."


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    request: AnalysisInput


@dataclass(frozen=True)
class Success:
    result: OptimizationResult


@dataclass(frozen=True)
class Failure:
    message: str


AnalysisState = Union[Idle, Loading, Success, Failure]


def can_submit(state: AnalysisState, has_image: bool) -> bool:
    return has_image and not isinstance(state, Loading)


def start(request: AnalysisInput) -> Loading:
    return Loading(request=request)


def reset() -> Idle:
    return Idle()


def run_analysis(
    request: AnalysisInput,
    analyze_fn: Callable[[AnalysisInput], OptimizationResult],
) -> Union[Success, Failure]:
    try:
        return Success(result=analyze_fn(request))
    except AnalysisFailed as e:
        return Failure(message=str(e) or GENERIC_ERROR_MESSAGE)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        return Failure(message=str(e) or GENERIC_ERROR_MESSAGE)
