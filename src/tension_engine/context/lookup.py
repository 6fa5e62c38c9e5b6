"""Static backend and metadata tables keyed by ``(type, scope)``.

Pure lookups with no dependency on tension. Unknown combinations return
the ``UNKNOWN_*`` sentinels instead of raising, so a dashboard can render
a "disconnected" tile rather than fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tension_engine.context.keys import normalize_label

CONNECTED = "connected"
DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class BackendDescriptor:
    type: str
    scope: str
    kind: str
    service: str
    status: str
    settings: dict[str, str] = field(default_factory=dict)

    @property
    def connected(self) -> bool:
        return self.status == CONNECTED


@dataclass(frozen=True)
class ContextMetadata:
    type: str
    scope: str
    display_name: str
    description: str
    tier: str
    encryption_level: str
    status: str


UNKNOWN_BACKEND = BackendDescriptor(
    type="UNKNOWN",
    scope="UNKNOWN",
    kind="unknown",
    service="",
    status=DISCONNECTED,
)

UNKNOWN_METADATA = ContextMetadata(
    type="UNKNOWN",
    scope="UNKNOWN",
    display_name="Unknown Context",
    description="No metadata registered for this type and scope",
    tier="unknown",
    encryption_level="unknown",
    status="unknown",
)

# (type, scope) -> (kind, service, settings)
_BACKENDS: dict[tuple[str, str], tuple[str, str, dict[str, str]]] = {
    ("STORAGE", "ENTERPRISE"): ("s3", "enterprise-object-store", {"region": "us-east-1"}),
    ("STORAGE", "DEVELOPMENT"): ("r2", "dev-object-store", {"bucket": "dev-artifacts"}),
    ("STORAGE", "LOCAL-SANDBOX"): ("filesystem", "local-object-store", {"path": "./data"}),
    ("SECRETS", "ENTERPRISE"): (
        "aws-secrets-manager",
        "enterprise-secrets",
        {"region": "us-east-1"},
    ),
    ("SECRETS", "DEVELOPMENT"): ("local-vault", "dev-secrets", {"address": "localhost:8200"}),
    ("SECRETS", "LOCAL-SANDBOX"): ("env-file", "local-secrets", {"file": ".env"}),
    ("SERVICE", "ENTERPRISE"): ("kubernetes", "enterprise-cluster", {"namespace": "production"}),
    ("SERVICE", "DEVELOPMENT"): ("docker-compose", "dev-stack", {"project": "dev"}),
    ("SERVICE", "LOCAL-SANDBOX"): ("local-process", "sandbox", {"host": "localhost"}),
}

_TYPE_INFO: dict[str, tuple[str, str]] = {
    "STORAGE": ("Storage", "Object storage for artifacts and uploads"),
    "SECRETS": ("Secrets", "Credential and key management"),
    "SERVICE": ("Service", "Application runtime"),
}

# scope -> (display prefix, tier, encryption level)
_SCOPE_INFO: dict[str, tuple[str, str, str]] = {
    "ENTERPRISE": ("Enterprise", "production", "maximum"),
    "DEVELOPMENT": ("Development", "staging", "enhanced"),
    "LOCAL-SANDBOX": ("Local Sandbox", "sandbox", "standard"),
}


def backend_descriptor(type: str, scope: str) -> BackendDescriptor:  # noqa: A002
    """Backend serving *type* in *scope*, or :data:`UNKNOWN_BACKEND`."""
    type_, scope_ = normalize_label(type), normalize_label(scope)
    entry = _BACKENDS.get((type_, scope_))
    if entry is None:
        return UNKNOWN_BACKEND
    kind, service, settings = entry
    return BackendDescriptor(
        type=type_,
        scope=scope_,
        kind=kind,
        service=service,
        status=CONNECTED,
        settings=dict(settings),
    )


def metadata_block(type: str, scope: str) -> ContextMetadata:  # noqa: A002
    """Descriptive metadata for *type* in *scope*, or :data:`UNKNOWN_METADATA`."""
    type_, scope_ = normalize_label(type), normalize_label(scope)
    type_info = _TYPE_INFO.get(type_)
    scope_info = _SCOPE_INFO.get(scope_)
    if type_info is None or scope_info is None:
        return UNKNOWN_METADATA
    type_name, description = type_info
    scope_name, tier, encryption_level = scope_info
    return ContextMetadata(
        type=type_,
        scope=scope_,
        display_name=f"{scope_name} {type_name}",
        description=description,
        tier=tier,
        encryption_level=encryption_level,
        status="active",
    )
