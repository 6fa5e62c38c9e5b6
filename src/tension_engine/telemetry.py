"""Context lifecycle and fan-out events.

Every event belongs to one context key (``TYPE-SCOPE-domain``):

=============================  =============================================
event                          attributes
=============================  =============================================
``context.created``            none
``context.recomputed``         score, trend, subscribers, failures
``context.subscriber_failed``  error (exception class name)
``context.torn_down``          none
=============================  =============================================

:func:`emit` never raises. A sink that fails is logged and the caller
carries on, so telemetry cannot interrupt a recomputation round.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

CONTEXT_CREATED = "context.created"
CONTEXT_RECOMPUTED = "context.recomputed"
CONTEXT_TORN_DOWN = "context.torn_down"
SUBSCRIBER_FAILED = "context.subscriber_failed"


@dataclass(frozen=True)
class ContextEvent:
    name: str
    key: str
    attributes: dict[str, Any] = field(default_factory=dict)
    # epoch seconds, same clock domain as TensionResult.updated_at
    timestamp: float = field(default_factory=time.time)


@runtime_checkable
class TelemetrySink(Protocol):
    def emit(self, event: ContextEvent) -> None:
        raise NotImplementedError


class NoOpTelemetrySink:
    def emit(self, event: ContextEvent) -> None:
        _ = event


class InMemoryTelemetrySink:
    """Collects events in order. Used by tests and debugging sessions."""

    def __init__(self) -> None:
        self.events: list[ContextEvent] = []

    def emit(self, event: ContextEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [e.name for e in self.events]

    def for_key(self, key: str) -> list[ContextEvent]:
        return [e for e in self.events if e.key == key]


class LoggerTelemetrySink:
    """One INFO record per event, e.g. ``context.recomputed SERVICE-ENTERPRISE-default``.

    The key, timestamp and attributes ride in ``extra`` for structured handlers.
    """

    def __init__(self, logger_name: str = "tension_engine.telemetry.events") -> None:
        self.logger = logging.getLogger(logger_name)

    def emit(self, event: ContextEvent) -> None:
        self.logger.info(
            "%s %s",
            event.name,
            event.key,
            extra={
                "context_key": event.key,
                "event_name": event.name,
                "event_timestamp": event.timestamp,
                "event_attributes": event.attributes,
            },
        )


def emit(sink: TelemetrySink, name: str, key: str, **attributes: Any) -> None:
    """Send a :class:`ContextEvent` to *sink*, logging instead of raising on failure."""
    try:
        sink.emit(ContextEvent(name=name, key=key, attributes=attributes))
    except Exception:
        logger.exception("Telemetry sink failed on %s for context %s", name, key)
