"""Context state: per-key results, memoized colors, subscriber fan-out."""

from tension_engine.context.bundle import (
    TREND_HUE_SHIFT,
    ColorBundle,
    build_color_bundle,
    effective_tension,
)
from tension_engine.context.driver import MetricsProvider, PeriodicDriver
from tension_engine.context.keys import DEFAULT_DOMAIN, ContextKey
from tension_engine.context.lookup import (
    UNKNOWN_BACKEND,
    UNKNOWN_METADATA,
    BackendDescriptor,
    ContextMetadata,
    backend_descriptor,
    metadata_block,
)
from tension_engine.context.state import ContextState, Subscriber
from tension_engine.context.store import ContextStore

__all__ = [
    "DEFAULT_DOMAIN",
    "TREND_HUE_SHIFT",
    "UNKNOWN_BACKEND",
    "UNKNOWN_METADATA",
    "BackendDescriptor",
    "ColorBundle",
    "ContextKey",
    "ContextMetadata",
    "ContextState",
    "ContextStore",
    "MetricsProvider",
    "PeriodicDriver",
    "Subscriber",
    "backend_descriptor",
    "build_color_bundle",
    "effective_tension",
    "metadata_block",
]
