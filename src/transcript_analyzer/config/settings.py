"""Pydantic settings models for transcript analyzer configuration.

Four settings classes load from separate YAML config files with environment
variable override support. Source priority (highest to lowest):

    1. Environment variables (with prefix, e.g., ANALYZER_DIRECT_TOKEN_THRESHOLD)
    2. .env file (for secrets, e.g., LLM_ANTHROPIC_API_KEY)
    3. YAML config file (e.g., config/analyzer.yaml)
    4. Default values defined here

Config paths are resolved relative to PROJECT_ROOT so the application works
regardless of the current working directory.
"""

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Resolve project root: settings.py -> config/ -> transcript_analyzer/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"


class _YamlBackedSettings(BaseSettings):
    """Base class wiring the YAML file in below env and .env sources."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class AnalyzerSettings(_YamlBackedSettings):
    """Strategy thresholds and generation parameters for the analysis pipeline."""

    # Documents below this many estimated tokens take the direct path
    direct_token_threshold: int = 4000
    # Documents above this many estimated tokens also get chunk summaries
    chunk_pass_token_threshold: int = 8000
    chunk_token_budget: int = 1000

    temperature: float = 0.5
    synthesis_max_tokens: int = 4096
    segment_summary_max_tokens: int = 500
    chunk_summary_max_tokens: int = 300

    # CLI defaults (the HTTP API always takes these from the request body)
    default_provider: str = "anthropic"
    default_model: str = "claude-3-5-sonnet-20241022"
    default_strategy: str = "balanced"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "analyzer.yaml"),
        env_prefix="ANALYZER_",
    )


class GatewaySettings(_YamlBackedSettings):
    """Provider endpoints, request timeout and transient-failure retry policy."""

    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    openai_base_url: str = "https://api.openai.com"
    google_base_url: str = "https://generativelanguage.googleapis.com"
    timeout_seconds: float = 120.0

    # 1 = a single attempt, no retry
    max_attempts: int = 1
    backoff_min_seconds: float = 2.0
    backoff_max_seconds: float = 30.0

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "gateway.yaml"),
        env_prefix="GATEWAY_",
    )


class PipelineSettings(_YamlBackedSettings):
    """Process operations: logging paths and rotation, API bind address."""

    log_dir: str = "logs"
    log_level: str = "INFO"  # console handler; the JSON file always gets DEBUG
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5
    api_host: str = "127.0.0.1"
    api_port: int = 5000

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_prefix="PIPELINE_",
    )


class CredentialSettings(BaseSettings):
    """Provider API keys for the command-line entry point.

    Keys come from .env or environment variables only -- they must NEVER
    appear in YAML files.
    """

    anthropic_api_key: str = ""
    openai_api_key: str = ""
    google_api_key: str = ""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_prefix="LLM_",
        extra="ignore",
    )

    def key_for(self, provider: str) -> str:
        """Return the configured key for *provider*, or an empty string."""
        return getattr(self, f"{provider}_api_key", "") or ""
