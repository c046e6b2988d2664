"""Tracing helpers for generator instrumentation.

Only the OpenTelemetry API is used. Without a configured SDK every tracer is
a no-op, so instrumented code runs unchanged inside protoc.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Final

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode
from opentelemetry.util.types import AttributeValue

_LOGGER = logging.getLogger(__name__)

SCOPE_GENERATOR: Final[str] = "cachegen.generator"
SCOPE_CLI: Final[str] = "cachegen.cli"


def get_tracer(scope_name: str) -> trace.Tracer:
    """Return a tracer for the given instrumentation scope.

    Parameters
    ----------
    scope_name
        Instrumentation scope name.

    Returns
    -------
    opentelemetry.trace.Tracer
        Tracer bound to the requested scope.
    """
    return trace.get_tracer(scope_name)


def _normalize_value(value: object) -> AttributeValue:
    if isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [str(item) for item in value if item is not None]
    return str(value)


def normalize_attributes(attrs: Mapping[str, object] | None) -> dict[str, AttributeValue]:
    """Normalize raw attribute values into OpenTelemetry-safe types.

    ``None`` values are dropped; sequences become string lists and any other
    object is rendered with ``str``.

    Returns
    -------
    dict[str, AttributeValue]
        Normalized attribute mapping.
    """
    if not attrs:
        return {}
    return {str(key): _normalize_value(value) for key, value in attrs.items() if value is not None}


def set_span_attributes(span: Span, attrs: Mapping[str, object] | None) -> None:
    """Attach normalized attributes to a span."""
    for key, value in normalize_attributes(attrs).items():
        span.set_attribute(key, value)


def record_exception(span: Span, exc: Exception) -> None:
    """Record an exception on a span and mark it as error.

    Parameters
    ----------
    span
        Span to annotate.
    exc
        Exception to record.
    """
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR))


@contextmanager
def stage_span(
    name: str,
    *,
    stage: str,
    scope_name: str = SCOPE_GENERATOR,
    attributes: Mapping[str, object] | None = None,
) -> Iterator[Span]:
    """Start a stage span that records duration, status and failures.

    Parameters
    ----------
    name
        Span name.
    stage
        Stage name recorded as ``cachegen.stage``.
    scope_name
        Instrumentation scope name.
    attributes
        Optional span attributes.

    Yields
    ------
    Span
        The started span.
    """
    base_attrs: dict[str, object] = {"cachegen.stage": stage}
    if attributes:
        base_attrs.update(attributes)
    tracer = get_tracer(scope_name)
    start = time.monotonic()
    status = "ok"
    with tracer.start_as_current_span(name, attributes=normalize_attributes(base_attrs)) as span:
        try:
            yield span
        except Exception as exc:
            status = "error"
            record_exception(span, exc)
            raise
        finally:
            duration_s = time.monotonic() - start
            set_span_attributes(span, {"duration_s": duration_s, "status": status})
            _LOGGER.debug("Stage %s finished in %.3fs (%s).", stage, duration_s, status)


__all__ = [
    "SCOPE_CLI",
    "SCOPE_GENERATOR",
    "get_tracer",
    "normalize_attributes",
    "record_exception",
    "set_span_attributes",
    "stage_span",
]
