"""
Server-side CSV export via PostgreSQL COPY.

The server formats and streams the result set; this module only moves the raw
bytes psycopg yields into the output file. Rows are never parsed or counted
client-side: the row count is the one the server reports for the COPY.

The user query is embedded as-is. It is neither validated nor escaped.
"""

from __future__ import annotations

from pathlib import Path

import psycopg
from psycopg import Connection

from pg_porter.errors import ExportError
from pg_porter.utils.logging import get_logger

log = get_logger(__name__)

FIELD_DELIMITER = ","


def build_copy_statement(sql: str) -> str:
    return f"COPY ({sql}) TO STDOUT WITH (FORMAT csv, HEADER, DELIMITER '{FIELD_DELIMITER}')"


def copy_to_csv(conn: Connection, sql: str, out: str | Path) -> int:
    """
    Stream the result of `sql` into `out` as CSV with a header row.

    The output file is created (or truncated) and always closed before this
    function returns or raises.

    Returns
    -------
    int
        Number of rows reported by the server.

    Raises
    ------
    ExportError
        If the file cannot be created or written, or the COPY fails.
    """
    statement = build_copy_statement(sql)
    try:
        f = open(out, "wb")
    except OSError as exc:
        raise ExportError(f"error creating file {str(out)!r}: {exc}") from exc

    with f:
        try:
            with conn.cursor() as cur:
                with cur.copy(statement) as copy:
                    for chunk in copy:
                        f.write(chunk)
                rows = cur.rowcount
        except psycopg.Error as exc:
            raise ExportError(f"failed to copy: {exc}") from exc
        except OSError as exc:
            raise ExportError(f"failed to write {str(out)!r}: {exc}") from exc

    log.debug("COPY finished", extra={"rows": rows, "out": str(out)})
    return rows


__all__ = ["FIELD_DELIMITER", "build_copy_statement", "copy_to_csv"]
