"""
Utilities package for pg-porter.

Exports shared helpers for logging and profiling. Keep this package lightweight
and free of export-specific logic.
"""

from pg_porter.utils.logging import configure_logging, get_logger
from pg_porter.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
