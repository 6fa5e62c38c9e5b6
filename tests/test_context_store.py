"""Tests for ContextStore and the static backend/metadata lookups."""

from __future__ import annotations

import pytest

from tension_engine.context.keys import ContextKey
from tension_engine.context.lookup import (
    UNKNOWN_BACKEND,
    UNKNOWN_METADATA,
    backend_descriptor,
    metadata_block,
)
from tension_engine.context.store import ContextStore
from tension_engine.errors import ConfigurationError, ContextClosedError
from tension_engine.telemetry import (
    CONTEXT_CREATED,
    CONTEXT_RECOMPUTED,
    CONTEXT_TORN_DOWN,
)
from tests.conftest import EXAMPLE_METRICS, FakeClock, make_uniform_bag


def _store(**kwargs) -> ContextStore:
    kwargs.setdefault("clock", FakeClock())
    return ContextStore(**kwargs)


class TestContextStore:
    def test_get_or_create_is_idempotent(self):
        store = _store()
        a = store.get_or_create("service", "enterprise")
        b = store.get_or_create("SERVICE", "ENTERPRISE", "default")
        assert a is b
        assert len(store) == 1

    def test_domains_are_separate(self):
        store = _store()
        a = store.get_or_create("service", "enterprise", "billing")
        b = store.get_or_create("service", "enterprise", "search")
        assert a is not b
        assert len(store) == 2

    def test_contexts_do_not_share_history(self):
        store = _store()
        hot = store.get_or_create("service", "enterprise")
        cold = store.get_or_create("service", "development")
        for _ in range(3):
            hot.tick(make_uniform_bag(90))
        result = cold.tick(make_uniform_bag(10))
        assert len(result.history) == 1
        assert hot.analyzer is not cold.analyzer

    def test_stores_are_independent(self):
        first = _store()
        second = _store()
        first.get_or_create("storage", "enterprise")
        assert ("STORAGE", "ENTERPRISE") not in second
        assert len(second) == 0

    def test_get_accepts_tuple_and_key(self):
        store = _store()
        state = store.get_or_create("storage", "local_sandbox")
        assert store.get(("storage", "local-sandbox")) is state
        assert store.get(ContextKey.of("STORAGE", "LOCAL-SANDBOX")) is state
        assert store.get(("storage", "enterprise")) is None

    def test_contains(self):
        store = _store()
        store.get_or_create("secrets", "development")
        assert ("secrets", "development") in store
        assert ("secrets", "development", "default") in store
        assert "secrets" not in store

    def test_tick_by_key(self):
        store = _store()
        store.get_or_create("service", "enterprise")
        result = store.tick(("service", "enterprise"), EXAMPLE_METRICS)
        assert result.score == pytest.approx(21.67)

    def test_tick_unknown_key(self):
        with pytest.raises(KeyError):
            _store().tick(("service", "enterprise"), {})

    def test_teardown(self):
        store = _store()
        state = store.get_or_create("service", "enterprise")
        assert store.teardown(("service", "enterprise")) is True
        assert state.closed
        assert ("service", "enterprise") not in store
        with pytest.raises(ContextClosedError):
            state.tick({})

    def test_teardown_unknown_returns_false(self):
        assert _store().teardown(("service", "enterprise")) is False

    def test_recreate_after_teardown_is_fresh(self):
        store = _store()
        old = store.get_or_create("service", "enterprise")
        old.tick({})
        store.teardown(old.key)
        new = store.get_or_create("service", "enterprise")
        assert new is not old
        assert new.result is None

    def test_teardown_all(self):
        store = _store()
        states = [
            store.get_or_create("service", "enterprise"),
            store.get_or_create("storage", "development"),
        ]
        assert store.teardown_all() == 2
        assert len(store) == 0
        assert all(s.closed for s in states)

    def test_iter_and_keys(self):
        store = _store()
        store.get_or_create("service", "enterprise")
        store.get_or_create("storage", "enterprise")
        assert {str(k) for k in store.keys()} == {
            "SERVICE-ENTERPRISE-default",
            "STORAGE-ENTERPRISE-default",
        }
        assert len(list(store)) == 2

    def test_config_applies_to_every_context(self):
        store = _store(config={"history_capacity": 2})
        state = store.get_or_create("service", "enterprise")
        for level in (10, 20, 30):
            state.tick(make_uniform_bag(level))
        assert [p.score for p in state.result.history] == [20.0, 30.0]

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            ContextStore({"history_capacity": 0})

    def test_lifecycle_telemetry(self, sink):
        store = _store(telemetry=sink)
        store.get_or_create("service", "enterprise")
        store.get_or_create("service", "enterprise")
        store.tick(("service", "enterprise"), {})
        store.teardown(("service", "enterprise"))
        assert sink.names() == [CONTEXT_CREATED, CONTEXT_RECOMPUTED, CONTEXT_TORN_DOWN]


class TestLookups:
    @pytest.mark.parametrize(
        "type_,scope,kind",
        [
            ("STORAGE", "ENTERPRISE", "s3"),
            ("SECRETS", "ENTERPRISE", "aws-secrets-manager"),
            ("SECRETS", "DEVELOPMENT", "local-vault"),
            ("SERVICE", "LOCAL-SANDBOX", "local-process"),
            ("service", "local_sandbox", "local-process"),
        ],
    )
    def test_known_backends(self, type_, scope, kind):
        backend = backend_descriptor(type_, scope)
        assert backend.kind == kind
        assert backend.connected

    def test_unknown_backend(self):
        backend = backend_descriptor("QUEUE", "ENTERPRISE")
        assert backend is UNKNOWN_BACKEND
        assert backend.kind == "unknown"
        assert not backend.connected

    def test_metadata(self):
        meta = metadata_block("storage", "development")
        assert meta.display_name == "Development Storage"
        assert meta.tier == "staging"
        assert meta.encryption_level == "enhanced"
        assert meta.status == "active"

    def test_unknown_metadata(self):
        meta = metadata_block("SERVICE", "PRODUCTION")
        assert meta is UNKNOWN_METADATA
        assert meta.status == "unknown"

    def test_lookups_are_stable(self):
        assert backend_descriptor("SERVICE", "ENTERPRISE") == backend_descriptor(
            "SERVICE", "ENTERPRISE"
        )
