"""Transcript Analyzer -- application entry point.

Usage:
    python main.py <transcript.txt> [strategy]   analyze one transcript, print JSON
    python main.py serve                         run the HTTP API

Startup sequence:
    1. Load configuration (pipeline, analyzer, gateway; no code logs yet)
    2. Setup logging from the pipeline settings
    3. Run the requested command (the file command also loads credentials)
"""

import json
import logging
import sys
from pathlib import Path

from transcript_analyzer.analyzer import HierarchicalAnalyzer, analyze_transcript
from transcript_analyzer.config import (
    AnalyzerSettings,
    CredentialSettings,
    GatewaySettings,
    PipelineSettings,
    load_all_settings,
)
from transcript_analyzer.gateway import HttpCompletionGateway
from transcript_analyzer.logging import setup_logging

logger = logging.getLogger(__name__)

USAGE = "usage: main.py <transcript.txt> [fast|balanced] | main.py serve"


def _serve(pipeline: PipelineSettings, analyzer_settings: AnalyzerSettings) -> int:
    import uvicorn

    from transcript_analyzer.api import create_app

    logger.info("Serving API on %s:%s", pipeline.api_host, pipeline.api_port)
    uvicorn.run(
        create_app(analyzer_settings=analyzer_settings),
        host=pipeline.api_host,
        port=pipeline.api_port,
        log_config=None,
    )
    return 0


def _analyze_file(
    path: Path,
    strategy: str | None,
    analyzer_settings: AnalyzerSettings,
    gateway_settings: GatewaySettings,
) -> int:
    credentials = CredentialSettings()

    provider = analyzer_settings.default_provider
    model = analyzer_settings.default_model

    # Log non-sensitive config values (never log API keys)
    logger.info(
        "Config loaded -- analyzer: provider=%s, model=%s, direct<%d tokens, chunk pass>%d tokens",
        provider,
        model,
        analyzer_settings.direct_token_threshold,
        analyzer_settings.chunk_pass_token_threshold,
    )
    logger.info(
        "Config loaded -- gateway: timeout=%ss, max_attempts=%s",
        gateway_settings.timeout_seconds,
        gateway_settings.max_attempts,
    )

    text = path.read_text(encoding="utf-8")
    with HttpCompletionGateway(gateway_settings) as gateway:
        outcome = analyze_transcript(
            HierarchicalAnalyzer(gateway, analyzer_settings),
            text=text,
            provider=provider,
            model=model,
            api_key=credentials.key_for(provider),
            strategy=strategy or analyzer_settings.default_strategy,
        )

    if not outcome.success or outcome.result is None:
        logger.error("Analysis failed (%s): %s", outcome.error_kind, outcome.error)
        if outcome.incurred_cost:
            logger.error("Cost incurred before failure: $%.6f", outcome.incurred_cost)
        return 1

    print(json.dumps(outcome.result.model_dump(mode="json", by_alias=True), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the transcript analyzer CLI."""
    args = sys.argv[1:] if argv is None else argv

    # 1. Load config first -- pipeline settings are needed for logging
    analyzer_settings, gateway_settings, pipeline = load_all_settings()

    # 2. Setup logging BEFORE anything else logs
    setup_logging(
        log_dir=pipeline.log_dir,
        log_level_console=pipeline.log_level,
        max_bytes=pipeline.log_max_bytes,
        backup_count=pipeline.log_backup_count,
    )

    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    if args[0] == "serve":
        return _serve(pipeline, analyzer_settings)

    path = Path(args[0])
    if not path.is_file():
        logger.error("Transcript file not found: %s", path)
        return 2

    logger.info("Transcript Analyzer starting: %s", path)
    return _analyze_file(
        path,
        args[1] if len(args) > 1 else None,
        analyzer_settings,
        gateway_settings,
    )


if __name__ == "__main__":
    sys.exit(main())
