"""
Error taxonomy for pg-porter.

Every failure is fatal to the invocation; the CLI is the only place these are
turned into exit statuses.
"""

from __future__ import annotations


class PorterError(Exception):
    """Base class for all pg-porter failures."""


class ConfigError(PorterError):
    """A required setting is missing or malformed. No connection was attempted."""


class ConnectError(PorterError):
    """The database connection could not be established."""


class ConnectTimeoutError(ConnectError):
    """The connection deadline expired before the server answered."""


class ExportError(PorterError):
    """The output file could not be written or the server-side COPY failed."""


__all__ = [
    "PorterError",
    "ConfigError",
    "ConnectError",
    "ConnectTimeoutError",
    "ExportError",
]
