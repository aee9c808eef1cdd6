"""
pg-porter - export a PostgreSQL query result to CSV.

Resolves connection settings from flags, environment variables, and a dotenv
file, opens one connection, and lets the server stream the result set through
`COPY ... TO STDOUT` straight into the output file while a spinner shows
progress.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from pg_porter.config import EnvSettings, Settings, load_env_settings, resolve_settings
from pg_porter.domain.models import ExportResult
from pg_porter.errors import (
    ConfigError,
    ConnectError,
    ConnectTimeoutError,
    ExportError,
    PorterError,
)
from pg_porter.exporter import build_copy_statement, copy_to_csv
from pg_porter.orchestrator import run_export
from pg_porter.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "EnvSettings",
    "Settings",
    "load_env_settings",
    "resolve_settings",
    # Export
    "ExportResult",
    "build_copy_statement",
    "copy_to_csv",
    "run_export",
    # Errors
    "PorterError",
    "ConfigError",
    "ConnectError",
    "ConnectTimeoutError",
    "ExportError",
    # Logging
    "configure_logging",
    "get_logger",
]
