"""Hierarchical transcript analysis: strategy selection and call orchestration.

One ``analyze`` call is one pipeline run:

1. Clean the transcript and derive its Structure.
2. Choose the path -- the single branch point of the pipeline:

   - **direct** when ``estimated_tokens < direct_token_threshold`` (4000)
     or the caller asked for ``strategy="fast"``: one call with the
     caller's model over the full cleaned text.
   - **hierarchical** otherwise: one fast-model call per key segment, plus
     (above ``chunk_pass_token_threshold``, 8000) one fast-model call per
     1000-token chunk, then one synthesis call with the caller's model.

3. Parse the final response and total the cost of every call.

Calls are issued sequentially; summaries keep document order and the
synthesis call is only made after every tier-1 call has succeeded.  The
first gateway failure aborts the run with no partial result; the cost
already incurred is attached to the raised error as ``incurred_costs``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from transcript_analyzer.analyzer.parser import parse_structured_response
from transcript_analyzer.analyzer.prompt import (
    LEGAL_SYSTEM_PROMPT,
    build_chunk_prompt,
    build_direct_prompt,
    build_segment_prompt,
    build_synthesis_prompt,
)
from transcript_analyzer.analyzer.types import (
    AnalysisResult,
    ProcessingInfo,
    Strategy,
    StructureMetadata,
)
from transcript_analyzer.config.settings import AnalyzerSettings
from transcript_analyzer.errors import TranscriptAnalyzerError, ValidationError
from transcript_analyzer.gateway.pricing import fast_model_for, sum_costs
from transcript_analyzer.gateway.types import (
    CompletionGateway,
    CompletionRequest,
    CompletionResponse,
    CostEntry,
    Message,
)
from transcript_analyzer.text import (
    chunk_by_token_budget,
    clean_transcript,
    extract_structure,
    identify_segments,
)
from transcript_analyzer.text.types import SegmentType, Structure

logger = logging.getLogger(__name__)

DIRECT_PATH = "direct"
HIERARCHICAL_PATH = "hierarchical"


class _Run:
    """Per-invocation call ledger: cost entries and tier-1 call count."""

    def __init__(self) -> None:
        self.costs: list[CostEntry] = []
        self.tier_one_calls = 0


class HierarchicalAnalyzer:
    """Cost-aware analyzer for long legal transcripts.

    Args:
        gateway: Executes generation requests and prices them.
        settings: Thresholds and generation parameters.
        fast_models: Provider -> cheap model used for tier-1 summaries.
            Defaults to the built-in fast-tier table.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        settings: AnalyzerSettings | None = None,
        fast_models: Mapping[str, str] | None = None,
    ) -> None:
        self._gateway = gateway
        self._settings = settings or AnalyzerSettings()
        self._fast_models = fast_models

    def choose_path(self, structure: Structure, strategy: str) -> str:
        """Return ``"direct"`` or ``"hierarchical"`` for a document."""
        if (
            structure.estimated_tokens < self._settings.direct_token_threshold
            or strategy == Strategy.FAST.value
        ):
            return DIRECT_PATH
        return HIERARCHICAL_PATH

    def analyze(
        self,
        text: str,
        provider: str,
        model: str,
        api_key: str,
        strategy: str = Strategy.BALANCED.value,
    ) -> AnalysisResult:
        """Analyze one transcript and return takeaways, summary, action items and cost.

        Args:
            text: Raw transcript text.
            provider: ``anthropic``, ``openai`` or ``google``.
            model: Caller-selected (premium) model for the final call.
            api_key: Provider API key, forwarded with every call.
            strategy: ``"fast"`` forces the direct path; anything else lets
                document size decide.

        Returns:
            Fully populated AnalysisResult.

        Raises:
            ValidationError: Required input missing; no call was made.
            AuthenticationError: The provider rejected the key.
            ProviderError: Any other upstream failure.
            ConfigurationError: Unrecognised provider.
        """
        _validate_inputs(text, provider, model, api_key)
        strategy = strategy or Strategy.BALANCED.value

        cleaned = clean_transcript(text)
        structure = extract_structure(cleaned)
        path = self.choose_path(structure, strategy)
        logger.info(
            "Analyzing transcript: ~%d tokens, %d lines, strategy=%s -> %s path (%s/%s)",
            structure.estimated_tokens,
            structure.line_count,
            strategy,
            path,
            provider,
            model,
        )

        run = _Run()
        try:
            if path == DIRECT_PATH:
                content = self._analyze_directly(run, cleaned, provider, model, api_key)
            else:
                content = self._analyze_hierarchically(
                    run, cleaned, structure, provider, model, api_key
                )
        except TranscriptAnalyzerError as e:
            e.incurred_costs = list(run.costs)
            logger.error(
                "Analysis aborted after %d call(s), $%.6f discarded: %s",
                len(run.costs),
                sum_costs(run.costs),
                e,
            )
            raise

        parsed = parse_structured_response(content)
        result = AnalysisResult(
            key_takeaways=parsed.key_takeaways,
            summary=parsed.summary,
            action_items=parsed.action_items,
            metadata=StructureMetadata.from_structure(structure),
            costs=list(run.costs),
            total_cost=sum_costs(run.costs),
            processing=ProcessingInfo(
                strategy=strategy,
                path=path,
                chunks=run.tier_one_calls,
                total_tokens=structure.estimated_tokens,
            ),
        )
        logger.info(
            "Analysis complete: %s path, %d call(s), $%.6f total",
            path,
            len(result.costs),
            result.total_cost,
        )
        return result

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _analyze_directly(
        self, run: _Run, text: str, provider: str, model: str, api_key: str
    ) -> str:
        response = self._call(
            run,
            provider=provider,
            model=model,
            api_key=api_key,
            prompt=build_direct_prompt(text),
            max_tokens=self._settings.synthesis_max_tokens,
        )
        return response.content

    def _analyze_hierarchically(
        self,
        run: _Run,
        text: str,
        structure: Structure,
        provider: str,
        model: str,
        api_key: str,
    ) -> str:
        fast_model = fast_model_for(provider, self._fast_models)

        segments = identify_segments(text)
        logger.info("Summarizing %d key segments with %s", len(segments), fast_model)
        segment_summaries: list[tuple[SegmentType, str]] = []
        for segment in segments:
            response = self._call(
                run,
                provider=provider,
                model=fast_model,
                api_key=api_key,
                prompt=build_segment_prompt(segment),
                max_tokens=self._settings.segment_summary_max_tokens,
            )
            run.tier_one_calls += 1
            segment_summaries.append((segment.type, response.content))

        chunk_summaries: list[str] = []
        if structure.estimated_tokens > self._settings.chunk_pass_token_threshold:
            chunks = chunk_by_token_budget(text, self._settings.chunk_token_budget)
            logger.info("Summarizing %d chunks with %s", len(chunks), fast_model)
            for chunk in chunks:
                response = self._call(
                    run,
                    provider=provider,
                    model=fast_model,
                    api_key=api_key,
                    prompt=build_chunk_prompt(chunk.text),
                    max_tokens=self._settings.chunk_summary_max_tokens,
                )
                run.tier_one_calls += 1
                chunk_summaries.append(response.content)

        response = self._call(
            run,
            provider=provider,
            model=model,
            api_key=api_key,
            prompt=build_synthesis_prompt(structure, segment_summaries, chunk_summaries),
            max_tokens=self._settings.synthesis_max_tokens,
        )
        return response.content

    def _call(
        self,
        run: _Run,
        *,
        provider: str,
        model: str,
        api_key: str,
        prompt: str,
        max_tokens: int,
    ) -> CompletionResponse:
        response = self._gateway.complete(
            CompletionRequest(
                provider=provider,
                model=model,
                messages=[Message(role="user", content=prompt)],
                system_prompt=LEGAL_SYSTEM_PROMPT,
                temperature=self._settings.temperature,
                max_tokens=max_tokens,
                api_key=api_key,
            )
        )
        run.costs.append(response.cost)
        logger.debug(
            "Call %d (%s): $%.6f", len(run.costs), model, response.cost.total_cost
        )
        return response


def _validate_inputs(text: str, provider: str, model: str, api_key: str) -> None:
    if not text or not text.strip():
        raise ValidationError("Transcript text is required")
    if not provider or not model:
        raise ValidationError("Provider and model are required")
    if not api_key:
        raise ValidationError("API key is required")
