"""
Database connection factory for pg-porter.

Opens exactly one dedicated psycopg connection per invocation under the
configured deadline. There is no pooling and no retry: a failed attempt is
reported once and the process exits.
"""

from __future__ import annotations

import time

import psycopg
from psycopg import Connection

from pg_porter.errors import ConnectError, ConnectTimeoutError
from pg_porter.utils.logging import get_logger

log = get_logger(__name__)


def _is_timeout(exc: psycopg.OperationalError, elapsed: float, timeout: int) -> bool:
    timeout_cls = getattr(psycopg.errors, "ConnectionTimeout", None)
    if timeout_cls is not None and isinstance(exc, timeout_cls):
        return True
    return elapsed >= timeout


def connect(dsn: str, timeout: int) -> Connection:
    """
    Open a single autocommit connection, failing after `timeout` seconds.

    Parameters
    ----------
    dsn : str
        libpq connection string or `postgres://` URI.
    timeout : int
        Connection deadline in seconds. Applies to establishment only.

    Raises
    ------
    ConnectTimeoutError
        If the deadline expired before the connection was established.
    ConnectError
        For any other connection failure (unreachable host, bad credentials).
    """
    start = time.perf_counter()
    try:
        conn = psycopg.connect(dsn, connect_timeout=timeout, autocommit=True)
    except psycopg.OperationalError as exc:
        elapsed = time.perf_counter() - start
        if _is_timeout(exc, elapsed, timeout):
            raise ConnectTimeoutError(
                f"unable to init db connection: deadline of {timeout}s exceeded"
            ) from exc
        raise ConnectError(f"unable to init db connection: {exc}") from exc

    log.debug(
        "Connection established",
        extra={"connect_seconds": round(time.perf_counter() - start, 3)},
    )
    return conn


__all__ = ["connect"]
