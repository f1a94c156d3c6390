"""Shared types for the transcript analysis pipeline.

Defines AnalysisResult and its parts, used across the analyzer service,
the result-style entry point and the HTTP API.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_analyzer.gateway.types import CostEntry
from transcript_analyzer.text.types import Structure


class Strategy(str, Enum):
    """Caller-requested processing strategy.

    ``fast`` always takes the direct path.  ``balanced`` lets document size
    decide between direct and hierarchical processing.
    """

    FAST = "fast"
    BALANCED = "balanced"


class ErrorKind(str, Enum):
    """Classification of a failed analysis run."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PROVIDER = "provider"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class ParsedAnalysis:
    """The three labelled sections extracted from a generated response."""

    key_takeaways: str = ""
    summary: str = ""
    action_items: str = ""


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class StructureMetadata(_CamelModel):
    """Serializable view of a Structure (speakers sorted for stable output)."""

    speakers: list[str] = Field(default_factory=list)
    sections: list[str] = Field(default_factory=list)
    has_timestamps: bool = False
    line_count: int = 0
    estimated_tokens: int = 0

    @classmethod
    def from_structure(cls, structure: Structure) -> StructureMetadata:
        return cls(
            speakers=sorted(structure.speakers),
            sections=list(structure.sections),
            has_timestamps=structure.has_timestamps,
            line_count=structure.line_count,
            estimated_tokens=structure.estimated_tokens,
        )


class ProcessingInfo(_CamelModel):
    """How a run was processed.

    Attributes:
        strategy: The strategy the caller requested.
        path: ``"direct"`` or ``"hierarchical"`` -- the path actually taken.
        chunks: Gateway calls issued besides the synthesis call (0 on the
            direct path).
        total_tokens: Estimated tokens of the cleaned transcript.
    """

    strategy: str
    path: str
    chunks: int = 0
    total_tokens: int = 0


class AnalysisResult(_CamelModel):
    """Final output of one pipeline run.  Immutable once returned."""

    key_takeaways: str
    summary: str
    action_items: str
    metadata: StructureMetadata
    costs: list[CostEntry]
    total_cost: float
    processing: ProcessingInfo
