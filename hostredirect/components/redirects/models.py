"""
Redirects component input/output models.

Host-based redirect configuration and per-request decisions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# --- Validation Error ---


@dataclass(frozen=True)
class RedirectValidationError:
    """Redirect configuration error."""

    code: str
    message: str
    field: str | None = None


# --- Configuration Models ---


@dataclass(frozen=True)
class DomainPair:
    """A single source=dest entry."""

    source: str
    dest: str


@dataclass(frozen=True)
class DomainMapping:
    """
    Read-only mapping of raw host bytes to destination domain.

    Keys are matched exactly as received in the Host header.
    """

    entries: Mapping[bytes, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Freeze a private copy so callers can't mutate it after startup
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, host: bytes) -> str | None:
        return self.entries.get(host)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, host: object) -> bool:
        return host in self.entries


@dataclass(frozen=True)
class ResolverConfig:
    """Everything the resolver needs, built once at startup."""

    mapping: DomainMapping = field(default_factory=DomainMapping)
    fallback: str | None = None
    insecure: bool = False

    @property
    def scheme(self) -> str:
        return "http" if self.insecure else "https"


# --- Input Models ---


@dataclass(frozen=True)
class ConfigureInput:
    """Input for building resolver configuration."""

    pairs: tuple[str, ...] = ()
    fallback: str | None = None
    insecure: bool = False


@dataclass(frozen=True)
class ResolveRedirectInput:
    """Input for resolving a single request."""

    host: bytes | None
    target: bytes


# --- Output Models ---


@dataclass(frozen=True)
class ConfigureOutput:
    """Output for configure operation."""

    config: ResolverConfig | None
    errors: list[RedirectValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class RedirectDecision:
    """
    Outcome for one request.

    Either a 308 with a Location value, or a 400/500 rejection.
    ``reason`` is set for rejections only.
    """

    status_code: int
    body: str
    location: bytes | None = None
    reason: str | None = None

    @property
    def is_redirect(self) -> bool:
        return self.location is not None
