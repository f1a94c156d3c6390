"""Exception hierarchy for transcript analysis.

Library code raises these; :func:`transcript_analyzer.analyzer.analyze_transcript`
and the API routes translate them into outcome objects and HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transcript_analyzer.gateway.types import CostEntry


class TranscriptAnalyzerError(Exception):
    """Base exception for all transcript-analyzer errors.

    Attributes:
        incurred_costs: Cost entries of gateway calls that completed in the
            same run before this error aborted it.  Filled in by the
            analyzer; empty when raised outside a run.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.incurred_costs: list[CostEntry] = []


class ValidationError(TranscriptAnalyzerError):
    """Raised when required input (text, provider, model, key) is missing or malformed."""


class AuthenticationError(TranscriptAnalyzerError):
    """Raised when a provider rejects the API key."""


class ProviderError(TranscriptAnalyzerError):
    """Raised for any other upstream failure: rate limit, bad response, network."""


class ConfigurationError(TranscriptAnalyzerError):
    """Raised when the requested provider is not recognised."""
