"""Optional background driver that calls ``ContextState.tick`` on an interval.

Hosts with their own scheduler can skip this and call ``tick()`` directly.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from tension_engine.analysis.analyzer import TensionResult
from tension_engine.analysis.metrics import MetricBag
from tension_engine.errors import ContextClosedError

if TYPE_CHECKING:
    from tension_engine.context.state import ContextState

logger = logging.getLogger(__name__)

MetricsProvider = Callable[[], "MetricBag | Mapping[str, Any]"]


class PeriodicDriver:
    """Recompute *state* from *provider* every *interval* seconds.

    A failing provider or an invalid metric bag is logged and the loop
    carries on with the next interval. The loop ends on :meth:`stop` or
    once the context has been torn down.
    """

    def __init__(
        self,
        state: ContextState,
        provider: MetricsProvider,
        interval: float = 2.0,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self._state = state
        self._provider = provider
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        with self._thread_lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name=f"tension-driver-{self._state.key}",
                daemon=True,
            )
            self._thread.start()

    def run_once(self) -> TensionResult:
        """One recomputation round, on the calling thread."""
        return self._state.tick(self._provider())

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.run_once()
            except ContextClosedError:
                break
            except Exception:
                logger.exception("Recomputation for context %s failed", self._state.key)

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
