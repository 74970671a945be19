"""
Redirects component - host-based redirect resolution.
"""

from ._impl import (
    DEFAULT_BIND,
    MISSING_HOST_MESSAGE,
    PERMANENT_REDIRECT,
    REDIRECTING_MESSAGE,
    UNSUPPORTED_HOST_MESSAGE,
    RedirectResolver,
    build_domain_mapping,
    build_request_target,
    create_redirect_resolver,
    encode_header_value,
    is_valid_header_byte,
    parse_bind_address,
    parse_domain_pair,
)
from .component import (
    run,
    run_configure,
    run_resolve,
)
from .models import (
    ConfigureInput,
    ConfigureOutput,
    DomainMapping,
    DomainPair,
    RedirectDecision,
    RedirectValidationError,
    ResolveRedirectInput,
    ResolverConfig,
)

__all__ = [
    # Entry points
    "run",
    "run_configure",
    "run_resolve",
    # Input models
    "ConfigureInput",
    "ResolveRedirectInput",
    # Output models
    "ConfigureOutput",
    "RedirectDecision",
    "RedirectValidationError",
    # Configuration models
    "DomainMapping",
    "DomainPair",
    "ResolverConfig",
    # _impl re-exports
    "DEFAULT_BIND",
    "MISSING_HOST_MESSAGE",
    "PERMANENT_REDIRECT",
    "REDIRECTING_MESSAGE",
    "UNSUPPORTED_HOST_MESSAGE",
    "RedirectResolver",
    "build_domain_mapping",
    "build_request_target",
    "create_redirect_resolver",
    "encode_header_value",
    "is_valid_header_byte",
    "parse_bind_address",
    "parse_domain_pair",
]
