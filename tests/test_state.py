"""Tests for the analysis state union."""

from __future__ import annotations

import json

from backend.models import AnalysisInput, OptimizationResult
from frontend.api_client import AnalysisFailed
from frontend.state import (
    GENERIC_ERROR_MESSAGE,
    Failure,
    Idle,
    Loading,
    Success,
    can_submit,
    reset,
    run_analysis,
    start,
)


def test_submit_requires_image_and_no_request_in_flight(furniture_input: AnalysisInput) -> None:
    assert can_submit(Idle(), has_image=True) is True
    assert can_submit(Idle(), has_image=False) is False
    assert can_submit(Failure("boom"), has_image=True) is True
    assert can_submit(Loading(furniture_input), has_image=True) is False


def test_start_and_reset_replace_state(furniture_input: AnalysisInput) -> None:
    loading = start(furniture_input)
    assert loading == Loading(request=furniture_input)
    assert reset() == Idle()


def test_run_analysis_success(furniture_input: AnalysisInput, furniture_report: dict) -> None:
    result = OptimizationResult.model_validate_json(json.dumps(furniture_report))

    state = run_analysis(furniture_input, lambda request: result)

    assert state == Success(result=result)


def test_run_analysis_failure_keeps_message_verbatim(furniture_input: AnalysisInput) -> None:
    def _fail(request):
        raise AnalysisFailed("Empty response from AI")

    assert run_analysis(furniture_input, _fail) == Failure(message="Empty response from AI")


def test_run_analysis_failure_falls_back_to_generic_message(furniture_input: AnalysisInput) -> None:
    def _fail(request):
        raise AnalysisFailed()

    assert run_analysis(furniture_input, _fail) == Failure(message=GENERIC_ERROR_MESSAGE)


def test_run_analysis_captures_unexpected_errors(furniture_input: AnalysisInput) -> None:
    def _fail(request):
        raise KeyError("")

    state = run_analysis(furniture_input, _fail)
    assert isinstance(state, Failure)
    assert state.message
