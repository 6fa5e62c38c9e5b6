"""Tests for the optional PeriodicDriver."""

from __future__ import annotations

import logging
import threading

import pytest

from tension_engine.context.driver import PeriodicDriver
from tension_engine.errors import ContextStateError
from tests.conftest import EXAMPLE_METRICS, make_state


def _wait_for_rounds(state, rounds: int) -> threading.Event:
    done = threading.Event()
    seen = []

    def on_round(score, bundle, result):
        seen.append(score)
        if len(seen) >= rounds:
            done.set()

    state.subscribe(on_round)
    return done


class TestPeriodicDriver:
    def test_run_once_ticks_state(self):
        state = make_state()
        driver = PeriodicDriver(state, lambda: EXAMPLE_METRICS, interval=60)
        result = driver.run_once()
        assert state.result is result
        assert result.score == pytest.approx(21.67)

    @pytest.mark.parametrize("interval", [0, -1])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValueError, match="interval"):
            PeriodicDriver(make_state(), dict, interval=interval)

    def test_background_rounds(self):
        state = make_state()
        done = _wait_for_rounds(state, 3)
        driver = state.start_driver(lambda: EXAMPLE_METRICS, interval=0.01)
        try:
            assert done.wait(5.0)
            assert driver.running
            assert state.driver is driver
        finally:
            state.teardown()
        assert not driver.running

    def test_provider_failure_is_logged_and_loop_continues(self, caplog):
        state = make_state()
        calls = {"n": 0}

        def flaky():
            calls["n"] += 1
            if calls["n"] == 1:
                raise RuntimeError("metrics source down")
            return EXAMPLE_METRICS

        done = _wait_for_rounds(state, 1)
        with caplog.at_level(logging.ERROR):
            state.start_driver(flaky, interval=0.01)
            try:
                assert done.wait(5.0)
            finally:
                state.teardown()
        assert "Recomputation for context" in caplog.text

    def test_second_running_driver_rejected(self):
        state = make_state()
        state.start_driver(dict, interval=0.05)
        try:
            with pytest.raises(ContextStateError):
                state.start_driver(dict, interval=0.05)
        finally:
            state.teardown()

    def test_stop_then_restart(self):
        state = make_state()
        driver = PeriodicDriver(state, dict, interval=0.01)
        driver.start()
        driver.stop(timeout=5.0)
        assert not driver.running
        done = _wait_for_rounds(state, 1)
        driver.start()
        try:
            assert done.wait(5.0)
        finally:
            driver.stop(timeout=5.0)
            state.teardown()

    def test_attach_after_stopped_driver(self):
        state = make_state()
        first = state.start_driver(dict, interval=0.05)
        first.stop(timeout=5.0)
        second = state.start_driver(dict, interval=0.05)
        try:
            assert state.driver is second
        finally:
            state.teardown()
