"""
Engine configuration.

Loads drafting-client and failure-handling settings from environment
variables. Algorithm constants (vector size, similarity thresholds, excerpt
windows) are module constants next to the code that uses them; only
deployment-specific settings live here.
"""

import os
from dataclasses import dataclass


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class EngineConfig:
    """Configuration for the review engine.

    Environment Variables:
        OPENAI_API_KEY: Credentials for the drafting service
        DRAFTING_MODEL: Chat model used for every drafting request (default: gpt-4o-mini)
        DRAFTING_TIMEOUT_S: Per-request timeout in seconds (default: 60)
        DRAFTING_TEMPERATURE: Sampling temperature (default: 0.3)
        MAX_ERROR_LENGTH: Bound on failure reasons stored on a document (default: 500)
    """

    openai_api_key: str | None = None
    drafting_model: str = "gpt-4o-mini"
    request_timeout_s: float = 60.0
    temperature: float = 0.3
    max_error_length: int = 500

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load config from environment variables."""
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            drafting_model=os.environ.get("DRAFTING_MODEL", "gpt-4o-mini"),
            request_timeout_s=_float_env("DRAFTING_TIMEOUT_S", 60.0),
            temperature=_float_env("DRAFTING_TEMPERATURE", 0.3),
            max_error_length=_int_env("MAX_ERROR_LENGTH", 500),
        )


# Global config singleton
_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Get the global engine config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
