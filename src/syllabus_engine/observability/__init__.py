"""
Observability Module - OpenTelemetry tracing

Spans wrap the engine's expensive operations: drafting requests,
similarity passes and revisions. With TRACING_ENABLED unset the tracer is
a no-op, so instrumented code pays nothing.

USAGE:
------
from syllabus_engine.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("my_operation", attributes={"key": "value"}) as span:
    # ... do work ...
    span.set_attribute("result", "success")
"""

from syllabus_engine.observability.config import (
    TracingConfig,
    get_tracing_config,
    reset_tracing_config,
)
from syllabus_engine.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    reset_tracer,
)
from syllabus_engine.observability.attributes import (
    GEN_AI_SYSTEM,
    GEN_AI_REQUEST_MODEL,
    GEN_AI_USAGE_INPUT_TOKENS,
    GEN_AI_USAGE_OUTPUT_TOKENS,
    GEN_AI_PROMPT,
    GEN_AI_COMPLETION,
    SYLLABUS_DOCUMENT_ID,
    SYLLABUS_TASK,
    SYLLABUS_RISK_LEVEL,
    SYLLABUS_CHALLENGE_ROUND,
    drafting_call_attributes,
    similarity_attributes,
    revision_attributes,
)

__all__ = [
    # Config
    "TracingConfig",
    "get_tracing_config",
    "reset_tracing_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
    # Attributes
    "GEN_AI_SYSTEM",
    "GEN_AI_REQUEST_MODEL",
    "GEN_AI_USAGE_INPUT_TOKENS",
    "GEN_AI_USAGE_OUTPUT_TOKENS",
    "GEN_AI_PROMPT",
    "GEN_AI_COMPLETION",
    "SYLLABUS_DOCUMENT_ID",
    "SYLLABUS_TASK",
    "SYLLABUS_RISK_LEVEL",
    "SYLLABUS_CHALLENGE_ROUND",
    # Helpers
    "drafting_call_attributes",
    "similarity_attributes",
    "revision_attributes",
]
