"""
OpenTelemetry tracing configuration

Loads tracing settings from environment variables.
Tracing is off unless explicitly enabled.
"""

import os
from dataclasses import dataclass

_TRUTHY = ("true", "1", "yes")


@dataclass
class TracingConfig:
    """Configuration for OpenTelemetry tracing.

    Environment Variables:
        TRACING_ENABLED: Enable span export (default: false)
        TRACING_SERVICE_NAME: Service name on spans (default: syllabus-engine)
        TRACING_CAPTURE_CONTENT: Attach prompts/replies to spans (default: false)

    PRIVACY WARNING:
        Setting TRACING_CAPTURE_CONTENT=true exports raw syllabus text and
        instructor comments to whatever exporter the tracer provider uses.
        Only enable in controlled environments.
    """

    enabled: bool = False
    service_name: str = "syllabus-engine"
    capture_content: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        """Load config from environment variables."""
        return cls(
            enabled=os.environ.get("TRACING_ENABLED", "false").lower() in _TRUTHY,
            service_name=os.environ.get("TRACING_SERVICE_NAME", "syllabus-engine"),
            capture_content=os.environ.get("TRACING_CAPTURE_CONTENT", "false").lower() in _TRUTHY,
        )


_config: TracingConfig | None = None


def get_tracing_config() -> TracingConfig:
    """Get the global tracing config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = TracingConfig.from_env()
    return _config


def reset_tracing_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
