"""Shared fixtures for transcript-analyzer tests."""

from __future__ import annotations

import pytest

from tests.fakes.fake_gateway import FakeCompletionGateway
from transcript_analyzer.config.settings import AnalyzerSettings


@pytest.fixture
def analyzer_settings() -> AnalyzerSettings:
    """Explicit settings so local config files and env vars cannot change thresholds."""
    return AnalyzerSettings(
        direct_token_threshold=4000,
        chunk_pass_token_threshold=8000,
        chunk_token_budget=1000,
        temperature=0.5,
        synthesis_max_tokens=4096,
        segment_summary_max_tokens=500,
        chunk_summary_max_tokens=300,
    )


@pytest.fixture
def fake_gateway() -> FakeCompletionGateway:
    return FakeCompletionGateway()


@pytest.fixture
def short_transcript() -> str:
    """Small hearing excerpt well under the direct-path threshold."""
    return "\n".join(
        [
            "Page 1",
            "  1   THE CLERK: All rise. Court is in session at 9:30 AM.",
            "  2   JUDGE SMITH: Please be seated.",
            "  3   MR. DOE: Your Honor, the defense has a motion to suppress.",
            "  4   MS. ROE: Objection. The motion was not timely filed.",
            "  5   JUDGE SMITH: Overruled. I will hear it.",
            "DIRECT EXAMINATION",
            "  6   Q. Officer, were you sworn in today?",
            "  7   A. Yes.",
        ]
    )
