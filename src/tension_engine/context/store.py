"""Explicit registry of context states.

Pass a :class:`ContextStore` to whatever needs contexts instead of
reaching for a module-level map; separate stores (per test, per tenant)
never see each other's contexts.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator, Mapping
from typing import Any, Callable

from tension_engine.analysis.analyzer import TensionAnalyzer, TensionResult
from tension_engine.analysis.config import AnalyzerConfig
from tension_engine.analysis.metrics import MetricBag
from tension_engine.context.keys import DEFAULT_DOMAIN, ContextKey
from tension_engine.context.state import ContextState
from tension_engine.telemetry import (
    CONTEXT_CREATED,
    CONTEXT_TORN_DOWN,
    NoOpTelemetrySink,
    TelemetrySink,
    emit,
)

logger = logging.getLogger(__name__)


class ContextStore:
    """Creates contexts on first access and tears them down on request.

    Every context gets its own :class:`TensionAnalyzer` built from the
    store's config, so contexts share no mutable state and can be driven
    independently.

    Parameters
    ----------
    config:
        Analyzer configuration (or a mapping validated into one) applied
        to every context.
    telemetry:
        Sink for lifecycle and recomputation events.
    clock:
        Passed to each analyzer.
    """

    def __init__(
        self,
        config: AnalyzerConfig | Mapping[str, Any] | None = None,
        *,
        telemetry: TelemetrySink | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not isinstance(config, AnalyzerConfig):
            config = AnalyzerConfig.from_mapping(config)
        self._config = config
        self._telemetry = telemetry if telemetry is not None else NoOpTelemetrySink()
        self._clock = clock
        self._contexts: dict[ContextKey, ContextState] = {}
        self._lock = threading.RLock()

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @staticmethod
    def _coerce_key(key: ContextKey | tuple[str, ...]) -> ContextKey:
        if isinstance(key, ContextKey):
            return key
        return ContextKey.of(*key)

    def get_or_create(
        self, type: str, scope: str, domain: str = DEFAULT_DOMAIN  # noqa: A002
    ) -> ContextState:
        key = ContextKey.of(type, scope, domain)
        with self._lock:
            state = self._contexts.get(key)
            if state is None:
                analyzer = TensionAnalyzer(self._config, clock=self._clock)
                state = ContextState(key, analyzer, telemetry=self._telemetry)
                self._contexts[key] = state
                logger.debug("Created context %s", key)
                emit(self._telemetry, CONTEXT_CREATED, key=str(key))
            return state

    def get(self, key: ContextKey | tuple[str, ...]) -> ContextState | None:
        with self._lock:
            return self._contexts.get(self._coerce_key(key))

    def tick(
        self, key: ContextKey | tuple[str, ...], metrics: MetricBag | Mapping[str, Any]
    ) -> TensionResult:
        """Recompute an existing context. Raises ``KeyError`` for unknown keys."""
        state = self.get(key)
        if state is None:
            raise KeyError(f"Unknown context: {self._coerce_key(key)}")
        return state.tick(metrics)

    def teardown(self, key: ContextKey | tuple[str, ...]) -> bool:
        """Tear down and forget one context. Returns False if it did not exist."""
        key = self._coerce_key(key)
        with self._lock:
            state = self._contexts.pop(key, None)
        if state is None:
            return False
        state.teardown()
        emit(self._telemetry, CONTEXT_TORN_DOWN, key=str(key))
        return True

    def teardown_all(self) -> int:
        with self._lock:
            keys = list(self._contexts)
        return sum(1 for key in keys if self.teardown(key))

    def keys(self) -> list[ContextKey]:
        with self._lock:
            return list(self._contexts)

    def __len__(self) -> int:
        return len(self._contexts)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or not 2 <= len(key) <= 3:
            return False
        return self._coerce_key(key) in self._contexts

    def __iter__(self) -> Iterator[ContextState]:
        with self._lock:
            return iter(list(self._contexts.values()))
