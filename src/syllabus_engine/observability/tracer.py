"""
Tracer factory.

get_tracer() hands out an OpenTelemetry-backed tracer when tracing is
enabled and opentelemetry-api is importable, and a NoOpTracer otherwise.
Engine code only ever sets attributes and flags failures, so the span
surface stays that small.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Iterator, Protocol

logger = logging.getLogger(__name__)


class SpanProtocol(Protocol):
    def set_attribute(self, key: str, value: Any) -> None: ...

    def record_error(self, error: BaseException | str) -> None: ...


class TracerProtocol(Protocol):
    def start_span(
        self, name: str, attributes: dict[str, Any] | None = None
    ) -> AbstractContextManager[SpanProtocol]: ...


class NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def record_error(self, error: BaseException | str) -> None:
        pass


class NoOpTracer:
    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[NoOpSpan]:
        yield NoOpSpan()


class OTelSpan:
    """Adapts an OTel span to SpanProtocol."""

    def __init__(self, span: Any):
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, value)

    def record_error(self, error: BaseException | str) -> None:
        from opentelemetry.trace import Status, StatusCode

        if isinstance(error, BaseException):
            self._span.record_exception(error)
        self._span.set_status(Status(StatusCode.ERROR, str(error)))


class OTelTracer:
    """Opens OTel spans as the current span."""

    def __init__(self, tracer: Any):
        self._tracer = tracer

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[OTelSpan]:
        with self._tracer.start_as_current_span(name, attributes=attributes) as span:
            yield OTelSpan(span)


_tracer: TracerProtocol | None = None


def get_tracer() -> TracerProtocol:
    """Global tracer; the host application owns the provider and exporters."""
    global _tracer
    if _tracer is None:
        _tracer = _build_tracer()
    return _tracer


def _build_tracer() -> TracerProtocol:
    from syllabus_engine.observability.config import get_tracing_config

    config = get_tracing_config()
    if not config.enabled:
        return NoOpTracer()

    try:
        from opentelemetry import trace
    except ImportError:
        logger.warning("TRACING_ENABLED is set but opentelemetry-api is not installed")
        return NoOpTracer()

    return OTelTracer(trace.get_tracer(config.service_name))


def reset_tracer() -> None:
    global _tracer
    _tracer = None
