from __future__ import annotations

import contextlib
import os
import sys
from typing import Iterator, Optional

try:
    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
except Exception:  # pragma: no cover - optional dependency resolution
    trace = None
    Resource = None
    TracerProvider = None
    BatchSpanProcessor = None
    ConsoleSpanExporter = None
    OTLPSpanExporter = None


TRACER_NAME = "personalweb"


def _tracing_disabled() -> bool:
    return os.getenv("OTEL_SDK_DISABLED", "false").lower() == "true"


def init_observability(service_name: Optional[str] = None) -> None:
    if "pytest" in sys.modules or _tracing_disabled():
        return
    if trace is None or TracerProvider is None:
        return

    if isinstance(trace.get_tracer_provider(), TracerProvider):
        return

    name = service_name or os.getenv("OTEL_SERVICE_NAME", "personalweb")
    provider = TracerProvider(resource=Resource.create({"service.name": name}))

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint and OTLPSpanExporter is not None and BatchSpanProcessor is not None:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    elif BatchSpanProcessor is not None and ConsoleSpanExporter is not None:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)


@contextlib.contextmanager
def traced(span_name: str, **attributes) -> Iterator[None]:
    """Wrap a block in a span when tracing is installed; a no-op otherwise."""
    if trace is None:
        yield
        return
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(span_name) as span:
        for key, value in attributes.items():
            span.set_attribute(key, value)
        yield
