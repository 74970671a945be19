"""
Redirects component - host-based redirect resolution.

Builds the resolver configuration from command-line pairs and decides the
response for each incoming request.

Invariants:
- I1: Source hostnames are unique
- I2: Configuration is immutable once built
- I3: Every request yields exactly one decision (308, 400 or 500)
- I4: Location is never sent unless it is a legal header value
"""

from __future__ import annotations

from ._impl import (
    RedirectResolver,
    build_domain_mapping,
    parse_domain_pair,
)
from .models import (
    ConfigureInput,
    ConfigureOutput,
    DomainPair,
    RedirectDecision,
    RedirectValidationError,
    ResolveRedirectInput,
    ResolverConfig,
)

# --- Component Entry Points ---


def run_configure(inp: ConfigureInput) -> ConfigureOutput:
    """
    Build resolver configuration from ``source=dest`` pairs.

    Every malformed pair is reported; duplicates are only checked once all
    pairs parse.

    Args:
        inp: Input containing raw pairs, fallback and scheme flag.

    Returns:
        ConfigureOutput with the config or errors.
    """
    pairs: list[DomainPair] = []
    errors: list[RedirectValidationError] = []

    for text in inp.pairs:
        pair, error = parse_domain_pair(text)
        if error is not None:
            errors.append(error)
        elif pair is not None:
            pairs.append(pair)

    if errors:
        return ConfigureOutput(config=None, errors=errors, success=False)

    mapping, errors = build_domain_mapping(pairs)
    if mapping is None:
        return ConfigureOutput(config=None, errors=errors, success=False)

    config = ResolverConfig(
        mapping=mapping,
        fallback=inp.fallback,
        insecure=inp.insecure,
    )
    return ConfigureOutput(config=config, errors=[], success=True)


def run_resolve(
    inp: ResolveRedirectInput,
    *,
    config: ResolverConfig,
) -> RedirectDecision:
    """
    Resolve one request against the configuration.

    Args:
        inp: Input containing the raw Host value and request target.
        config: Resolver configuration.

    Returns:
        RedirectDecision for the request.
    """
    return RedirectResolver(config).resolve(inp.host, inp.target)


def run(
    inp: ConfigureInput | ResolveRedirectInput,
    *,
    config: ResolverConfig | None = None,
) -> ConfigureOutput | RedirectDecision:
    """
    Main entry point for the redirects component.

    Dispatches to appropriate handler based on input type.

    Args:
        inp: Input object determining the operation.
        config: Resolver configuration, required for resolve.

    Returns:
        Appropriate output object based on input type.
    """
    if isinstance(inp, ConfigureInput):
        return run_configure(inp)
    elif isinstance(inp, ResolveRedirectInput):
        if config is None:
            raise ValueError("config is required to resolve a request")
        return run_resolve(inp, config=config)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
