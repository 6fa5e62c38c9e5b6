"""The raw metric bag fed to the analyzer.

Every field is optional. ``None`` means "no signal", which is different
from a zero reading: absent metrics are left out of the weighted average
and lower the confidence instead.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _StrictModel(BaseModel):
    """Shared strict settings for analyzer contracts."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, allow_inf_nan=False)


class MetricBag(_StrictModel):
    """Sparse runtime signals. Accepts snake_case names or camelCase aliases."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        allow_inf_nan=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    error_rate: float | None = Field(default=None, ge=0, le=1)  # fraction
    latency: float | None = Field(default=None, ge=0)  # ms
    memory_usage: float | None = Field(default=None, ge=0, le=100)  # percent
    cpu_usage: float | None = Field(default=None, ge=0, le=100)
    disk_usage: float | None = Field(default=None, ge=0, le=100)
    queue_depth: float | None = Field(default=None, ge=0)  # items
    network_latency: float | None = Field(default=None, ge=0)  # ms
    cache_hit_rate: float | None = Field(default=None, ge=0, le=1)
    response_time_p95: float | None = Field(default=None, ge=0)  # ms
    error_count: float | None = Field(default=None, ge=0)
    active_connections: float | None = Field(default=None, ge=0)

    def present(self) -> dict[str, float]:
        """Metrics that carry a value, in declaration order."""
        return self.model_dump(exclude_none=True)


METRIC_NAMES: tuple[str, ...] = tuple(MetricBag.model_fields)

# The signals a fully instrumented scope is expected to report.
CORE_METRICS: tuple[str, ...] = (
    "error_rate",
    "latency",
    "memory_usage",
    "cpu_usage",
    "disk_usage",
    "queue_depth",
    "network_latency",
    "cache_hit_rate",
)
