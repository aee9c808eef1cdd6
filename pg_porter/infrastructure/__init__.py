"""
Infrastructure package for pg-porter.

Centralizes database connectivity. Keep this layer focused on I/O and resource
management, decoupled from export and reporting logic.
"""

from pg_porter.infrastructure.db_factory import connect

__all__ = [
    "connect",
]
