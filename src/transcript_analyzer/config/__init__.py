"""Configuration package -- typed, validated settings from YAML + .env."""

from .settings import (
    AnalyzerSettings,
    CredentialSettings,
    GatewaySettings,
    PipelineSettings,
)

__all__ = [
    "AnalyzerSettings",
    "CredentialSettings",
    "GatewaySettings",
    "PipelineSettings",
    "load_all_settings",
]


def load_all_settings() -> tuple[AnalyzerSettings, GatewaySettings, PipelineSettings]:
    """Load and return all non-secret configuration objects.

    Returns a tuple of (AnalyzerSettings, GatewaySettings, PipelineSettings),
    each populated from its own YAML file with environment variable overrides.
    """
    return AnalyzerSettings(), GatewaySettings(), PipelineSettings()
