"""Host-based permanent redirect server."""

__version__ = "0.1.0"
