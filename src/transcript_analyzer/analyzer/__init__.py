"""Transcript analysis entry point with error classification.

Wraps :class:`HierarchicalAnalyzer` so callers (the CLI and the HTTP API)
receive an outcome object instead of handling the exception taxonomy
themselves.  Taxonomy errors become a failed outcome carrying the error
kind and message; anything else is a programming error and propagates.

Public API:
    analyze_transcript(analyzer, text, provider, model, api_key, strategy)
        -> AnalysisOutcome
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from transcript_analyzer.analyzer.parser import parse_structured_response
from transcript_analyzer.analyzer.service import HierarchicalAnalyzer
from transcript_analyzer.analyzer.types import (
    AnalysisResult,
    ErrorKind,
    ParsedAnalysis,
    ProcessingInfo,
    Strategy,
    StructureMetadata,
)
from transcript_analyzer.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    TranscriptAnalyzerError,
    ValidationError,
)
from transcript_analyzer.gateway.pricing import sum_costs

logger = logging.getLogger(__name__)

__all__ = [
    "AnalysisOutcome",
    "AnalysisResult",
    "ErrorKind",
    "HierarchicalAnalyzer",
    "ParsedAnalysis",
    "ProcessingInfo",
    "Strategy",
    "StructureMetadata",
    "analyze_transcript",
    "classify_error",
    "parse_structured_response",
]

_ERROR_KINDS: tuple[tuple[type[TranscriptAnalyzerError], ErrorKind], ...] = (
    (ValidationError, ErrorKind.VALIDATION),
    (AuthenticationError, ErrorKind.AUTHENTICATION),
    (ConfigurationError, ErrorKind.CONFIGURATION),
    (ProviderError, ErrorKind.PROVIDER),
)


@dataclass
class AnalysisOutcome:
    """Result of one analysis request.

    Attributes:
        success: Whether a complete AnalysisResult was produced.
        result: The analysis (None on failure).
        error_kind: Failure classification (None on success).
        error: Message from the failing step (None on success).
        incurred_cost: Cost of calls that completed before a failure.  Not
            part of any result; kept for logging and operator visibility.
    """

    success: bool
    result: AnalysisResult | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None
    incurred_cost: float = 0.0


def classify_error(error: TranscriptAnalyzerError) -> ErrorKind:
    """Map a taxonomy exception onto its ErrorKind."""
    for error_type, kind in _ERROR_KINDS:
        if isinstance(error, error_type):
            return kind
    return ErrorKind.PROVIDER


def analyze_transcript(
    analyzer: HierarchicalAnalyzer,
    text: str,
    provider: str,
    model: str,
    api_key: str,
    strategy: str = Strategy.BALANCED.value,
) -> AnalysisOutcome:
    """Run one analysis and classify any failure.

    Args:
        analyzer: Configured analyzer.
        text: Raw transcript text.
        provider: Provider name.
        model: Caller-selected model.
        api_key: Provider API key.
        strategy: ``"fast"`` or ``"balanced"``.

    Returns:
        AnalysisOutcome with either ``result`` or ``error_kind``/``error``.
    """
    try:
        result = analyzer.analyze(
            text=text,
            provider=provider,
            model=model,
            api_key=api_key,
            strategy=strategy,
        )
    except TranscriptAnalyzerError as e:
        kind = classify_error(e)
        incurred = sum_costs(e.incurred_costs)
        logger.warning("Transcript analysis failed (%s): %s", kind.value, e.message)
        return AnalysisOutcome(
            success=False,
            error_kind=kind,
            error=e.message,
            incurred_cost=incurred,
        )

    return AnalysisOutcome(success=True, result=result)
