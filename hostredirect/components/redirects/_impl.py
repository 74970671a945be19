"""
RedirectResolver - host-based permanent redirects.

Maps the raw Host header of each request to a destination domain and
answers with a 308 pointing at the same path and query on that domain.

Key behaviors:
- Host lookup is byte-exact (no case folding, no port stripping)
- Unmapped hosts go to the fallback domain when one is configured
- Path and query are copied into Location without re-encoding
- A Location that isn't a legal header value is answered with 500
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable

from .models import (
    DomainMapping,
    DomainPair,
    RedirectDecision,
    RedirectValidationError,
    ResolverConfig,
)

logger = logging.getLogger(__name__)

# --- Constants ---

PERMANENT_REDIRECT = 308
BAD_REQUEST = 400
INTERNAL_SERVER_ERROR = 500

DEFAULT_BIND = "0.0.0.0:3000"

MISSING_HOST_MESSAGE = "Missing host header"
UNSUPPORTED_HOST_MESSAGE = "Unsupported hostname"
REDIRECTING_MESSAGE = "Redirecting"


# --- Configuration Parsing ---


def parse_domain_pair(text: str) -> tuple[DomainPair | None, RedirectValidationError | None]:
    """
    Parse a ``source=dest`` entry.

    Exactly one ``=`` is required. Empty sides are kept as-is.
    """
    pieces = text.split("=")
    if len(pieces) != 2:
        return None, RedirectValidationError(
            code="pair_malformed",
            message=f"Invalid domain pair: {text}",
            field="pairs",
        )

    source, dest = pieces
    return DomainPair(source=source, dest=dest), None


def build_domain_mapping(
    pairs: Iterable[DomainPair],
) -> tuple[DomainMapping | None, list[RedirectValidationError]]:
    """Build the host lookup table, rejecting duplicate sources."""
    entries: dict[bytes, str] = {}
    errors: list[RedirectValidationError] = []

    for pair in pairs:
        key = _host_key(pair.source)
        if key in entries:
            errors.append(
                RedirectValidationError(
                    code="duplicate_source",
                    message=f"Duplicate destination for domain name {pair.source}",
                    field="pairs",
                )
            )
            continue
        entries[key] = pair.dest

    if errors:
        return None, errors
    return DomainMapping(entries=entries), []


def parse_bind_address(text: str) -> tuple[tuple[str, int] | None, list[RedirectValidationError]]:
    """
    Parse ``host:port`` with an IP literal host.

    IPv6 hosts must be bracketed, e.g. ``[::1]:3000``.
    """
    host, sep, port_text = text.rpartition(":")
    if not sep or not host:
        return None, [
            RedirectValidationError(
                code="bind_malformed",
                message=f"Invalid bind address (expected host:port): {text}",
                field="bind",
            )
        ]

    errors: list[RedirectValidationError] = []

    bracketed = host.startswith("[") and host.endswith("]")
    literal = host[1:-1] if bracketed else host
    address: ipaddress.IPv4Address | ipaddress.IPv6Address | None
    try:
        address = ipaddress.ip_address(literal)
    except ValueError:
        address = None
    if address is None or (address.version == 6) != bracketed:
        errors.append(
            RedirectValidationError(
                code="bind_invalid_host",
                message=f"Invalid bind host: {host}",
                field="bind",
            )
        )

    # ASCII only: str.isdigit also accepts superscripts and fullwidth digits
    if not (port_text.isascii() and port_text.isdigit()) or int(port_text) > 65535:
        errors.append(
            RedirectValidationError(
                code="bind_invalid_port",
                message=f"Invalid bind port: {port_text}",
                field="bind",
            )
        )

    if errors:
        return None, errors
    return (literal, int(port_text)), []


def _host_key(source: str) -> bytes:
    # argv may carry undecodable bytes as surrogates; restore them
    return source.encode("utf-8", "surrogateescape")


# --- Header Encoding ---


def is_valid_header_byte(b: int) -> bool:
    """Visible ASCII, obs-text and HTAB are allowed; other controls are not."""
    return (b >= 0x20 and b != 0x7F) or b == 0x09


def encode_header_value(value: str) -> tuple[bytes | None, str | None]:
    """
    Encode a string as an HTTP header value.

    Returns (encoded, None) on success, (None, reason) otherwise.
    """
    try:
        encoded = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as e:
        return None, f"not encodable: {e.reason}"

    for offset, b in enumerate(encoded):
        if not is_valid_header_byte(b):
            return None, f"invalid header value byte 0x{b:02x} at offset {offset}"

    return encoded, None


# --- Request Helpers ---


def build_request_target(raw_path: bytes, query_string: bytes) -> bytes:
    """Join raw path and query back into the request target."""
    if query_string:
        return raw_path + b"?" + query_string
    return raw_path


def _log_request(host: bytes, target: bytes) -> None:
    uri = target.decode("utf-8", "backslashreplace")
    try:
        host_text = host.decode("utf-8")
    except UnicodeDecodeError:
        logger.info("Received request for non-UTF8 host %r with URI %s", host, uri)
        return
    logger.info("Received request for http://%s%s", host_text, uri)


# --- Resolver ---


class RedirectResolver:
    """
    Turns (Host, request target) into a RedirectDecision.

    Holds only the immutable ResolverConfig, so a single instance is
    shared by every concurrent request.
    """

    def __init__(self, config: ResolverConfig) -> None:
        self._config = config

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def destination_for(self, host: bytes) -> str | None:
        """Mapped destination, else fallback, else None."""
        dest = self._config.mapping.get(host)
        if dest is not None:
            return dest
        return self._config.fallback

    def build_location(self, dest: str, target: bytes) -> str:
        path = target.decode("utf-8", "surrogateescape")
        return f"{self._config.scheme}://{dest}{path}"

    def resolve(self, host: bytes | None, target: bytes) -> RedirectDecision:
        """Decide the response for one request."""
        if host is None:
            logger.warning("Received request without hostname")
            return RedirectDecision(
                status_code=BAD_REQUEST,
                body=MISSING_HOST_MESSAGE,
                reason="missing_host",
            )

        _log_request(host, target)

        dest = self.destination_for(host)
        if dest is None:
            return RedirectDecision(
                status_code=BAD_REQUEST,
                body=UNSUPPORTED_HOST_MESSAGE,
                reason="unsupported_hostname",
            )

        location = self.build_location(dest, target)
        encoded, error = encode_header_value(location)
        if encoded is None:
            logger.error("Refusing to send location %r: %s", location, error)
            return RedirectDecision(
                status_code=INTERNAL_SERVER_ERROR,
                body=f"Unable to convert location {location!r} to HTTP header value: {error}",
                reason="invalid_location",
            )

        return RedirectDecision(
            status_code=PERMANENT_REDIRECT,
            body=REDIRECTING_MESSAGE,
            location=encoded,
        )


def create_redirect_resolver(config: ResolverConfig | None = None) -> RedirectResolver:
    """Create a RedirectResolver."""
    return RedirectResolver(config or ResolverConfig())
