"""Exceptions raised while producing an optimization report."""


class AnalysisError(Exception):
    """Base class for every failure surfaced by the analysis backend."""

    status_code = 500


class ConfigurationError(AnalysisError):
    """The backend cannot reach Gemini because it is not configured."""

    status_code = 503


class AnalysisServiceError(AnalysisError):
    """Gemini call failed: transport error, timeout or non-success status."""

    status_code = 502


class EmptyResponseError(AnalysisServiceError):
    """Gemini answered successfully but returned no text."""


class ResponseParseError(AnalysisError):
    """Gemini's text could not be parsed into an OptimizationResult."""

    status_code = 502
