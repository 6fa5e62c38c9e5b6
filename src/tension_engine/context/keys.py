"""Context identity: ``(type, scope, domain)``."""

from __future__ import annotations

from typing import NamedTuple

DEFAULT_DOMAIN = "default"


def normalize_label(value: object) -> str:
    """``" local_sandbox "`` -> ``"LOCAL-SANDBOX"``. Used for types and scopes."""
    return str(value).strip().upper().replace("_", "-")


class ContextKey(NamedTuple):
    type: str
    scope: str
    domain: str

    @classmethod
    def of(cls, type: str, scope: str, domain: str = DEFAULT_DOMAIN) -> ContextKey:  # noqa: A002
        domain = domain.strip().lower() or DEFAULT_DOMAIN
        return cls(normalize_label(type), normalize_label(scope), domain)

    def __str__(self) -> str:
        return f"{self.type}-{self.scope}-{self.domain}"
