"""Per-context state: latest result, memoized colors, subscriber fan-out.

A context is recomputed only through :meth:`ContextState.tick`, either by
the caller directly or by a :class:`~tension_engine.context.driver.PeriodicDriver`.
Each context must have at most one driver; with that rule in place the
driver is the only writer of the context's analysis state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from tension_engine.analysis.advice import Recommendation, get_recommendations
from tension_engine.analysis.analyzer import TensionAnalyzer, TensionResult, Trend
from tension_engine.analysis.metrics import MetricBag
from tension_engine.context.bundle import ColorBundle, build_color_bundle
from tension_engine.context.keys import ContextKey
from tension_engine.context.lookup import (
    BackendDescriptor,
    ContextMetadata,
    backend_descriptor,
    metadata_block,
)
from tension_engine.errors import ContextClosedError, ContextStateError
from tension_engine.telemetry import (
    CONTEXT_RECOMPUTED,
    SUBSCRIBER_FAILED,
    NoOpTelemetrySink,
    TelemetrySink,
    emit,
)

if TYPE_CHECKING:
    from tension_engine.context.driver import MetricsProvider, PeriodicDriver

logger = logging.getLogger(__name__)

Subscriber = Callable[[float, ColorBundle, TensionResult], None]


class _Subscription:
    __slots__ = ("callback",)

    def __init__(self, callback: Subscriber) -> None:
        self.callback = callback


class ContextState:
    """Holds one context key's latest tension result and its subscribers."""

    def __init__(
        self,
        key: ContextKey,
        analyzer: TensionAnalyzer | None = None,
        *,
        telemetry: TelemetrySink | None = None,
    ) -> None:
        self._key = key
        self._analyzer = analyzer if analyzer is not None else TensionAnalyzer()
        self._telemetry = telemetry if telemetry is not None else NoOpTelemetrySink()
        self._lock = threading.RLock()
        self._subscriptions: list[_Subscription] = []
        self._memo: dict[tuple[float, Trend], ColorBundle] = {}
        self._result: TensionResult | None = None
        self._driver: PeriodicDriver | None = None
        self._closed = False

    # ── identity and static lookups ───────────────────────────────

    @property
    def key(self) -> ContextKey:
        return self._key

    @property
    def analyzer(self) -> TensionAnalyzer:
        return self._analyzer

    @property
    def backend(self) -> BackendDescriptor:
        return backend_descriptor(self._key.type, self._key.scope)

    @property
    def metadata(self) -> ContextMetadata:
        return metadata_block(self._key.type, self._key.scope)

    @property
    def closed(self) -> bool:
        return self._closed

    # ── current state ─────────────────────────────────────────────

    @property
    def result(self) -> TensionResult | None:
        return self._result

    @property
    def score(self) -> float | None:
        return self._result.score if self._result is not None else None

    @property
    def trend(self) -> Trend | None:
        return self._result.trend if self._result is not None else None

    def color_bundle(self) -> ColorBundle | None:
        """Colors for the current ``(score, trend)``; ``None`` before the first tick."""
        with self._lock:
            result = self._result
            if result is None:
                return None
            memo_key = (result.score, result.trend)
            bundle = self._memo.get(memo_key)
            if bundle is None:
                bundle = build_color_bundle(result.score, result.trend)
                self._memo[memo_key] = bundle
            return bundle

    def recommendations(self) -> list[Recommendation]:
        if self._result is None:
            return []
        return get_recommendations(self._result, self._analyzer.config)

    # ── recomputation ─────────────────────────────────────────────

    def tick(self, metrics: MetricBag | Mapping[str, Any]) -> TensionResult:
        """Analyze *metrics*, store the result and notify every subscriber."""
        with self._lock:
            self._ensure_open()
            result = self._analyzer.analyze(str(self._key), metrics)
            memo_key = (result.score, result.trend)
            bundle = self._memo.get(memo_key)
            if bundle is None:
                bundle = build_color_bundle(result.score, result.trend)
                self._memo = {memo_key: bundle}
            self._result = result
            snapshot = list(self._subscriptions)

        failures = self._notify(snapshot, result, bundle)
        emit(
            self._telemetry,
            CONTEXT_RECOMPUTED,
            key=str(self._key),
            score=result.score,
            trend=result.trend.value,
            subscribers=len(snapshot),
            failures=failures,
        )
        return result

    refresh = tick

    def _notify(
        self,
        snapshot: list[_Subscription],
        result: TensionResult,
        bundle: ColorBundle,
    ) -> int:
        failures = 0
        for subscription in snapshot:
            try:
                subscription.callback(result.score, bundle, result)
            except Exception as exc:
                failures += 1
                logger.exception("Subscriber for context %s failed", self._key)
                emit(
                    self._telemetry,
                    SUBSCRIBER_FAILED,
                    key=str(self._key),
                    error=type(exc).__name__,
                )
        return failures

    # ── subscriptions ─────────────────────────────────────────────

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it.

        Rounds iterate over a snapshot, so unsubscribing while a round is in
        progress only affects later rounds.
        """
        subscription = _Subscription(callback)
        with self._lock:
            self._ensure_open()
            self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    # ── driver and lifecycle ──────────────────────────────────────

    @property
    def driver(self) -> PeriodicDriver | None:
        return self._driver

    def attach_driver(self, driver: PeriodicDriver) -> None:
        with self._lock:
            self._ensure_open()
            if self._driver is not None and self._driver.running:
                raise ContextStateError(f"Context {self._key} already has a running driver")
            self._driver = driver

    def start_driver(self, provider: MetricsProvider, interval: float = 2.0) -> PeriodicDriver:
        """Create, attach and start a :class:`PeriodicDriver` for this context."""
        from tension_engine.context.driver import PeriodicDriver

        driver = PeriodicDriver(self, provider, interval)
        self.attach_driver(driver)
        driver.start()
        return driver

    def teardown(self) -> None:
        """Stop the driver, drop subscribers and cached colors. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            driver, self._driver = self._driver, None
            self._subscriptions.clear()
            self._memo.clear()
        # outside the lock: the driver thread may be waiting on it inside tick()
        if driver is not None:
            driver.stop()
        logger.debug("Context %s torn down", self._key)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ContextClosedError(f"Context {self._key} has been torn down")
