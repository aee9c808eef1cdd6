"""
Runs one export end to end: connect, stream on a background task, report.

Usage:
    from pg_porter.orchestrator import run_export

    result = run_export(settings)
    print(result.rows)

State only moves forward: connecting -> exporting -> reporting. Any failure is
raised to the caller and nothing is retried. Only connection establishment is
bounded by the configured timeout; a stalled COPY runs until the process is
interrupted, which cancels it on the server.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import typer

from pg_porter.config import Settings
from pg_porter.domain.models import ExportResult
from pg_porter.exporter import copy_to_csv
from pg_porter.infrastructure.db_factory import connect
from pg_porter.reporter import POLL_INTERVAL_SECONDS, Echo, wait_for
from pg_porter.utils.logging import get_logger
from pg_porter.utils.profiler import profile_block

log = get_logger(__name__)


def run_export(
    settings: Settings,
    interval: float = POLL_INTERVAL_SECONDS,
    echo: Echo = typer.echo,
) -> ExportResult:
    """
    Export the result of `settings.sql` to `settings.out`.

    Parameters
    ----------
    settings : Settings
        Resolved configuration for this invocation.
    interval : float
        Seconds between spinner redraws.
    echo : callable
        Sink for the progress line (typer.echo-compatible).

    Returns
    -------
    ExportResult
        Server-reported row count plus elapsed time and peak memory.

    Raises
    ------
    ConnectError, ConnectTimeoutError, ExportError
    """
    log.info(f"[CONNECT] {settings.describe_target()}", extra={"timeout": settings.timeout})
    conn = connect(settings.build_dsn(), settings.timeout)
    try:
        log.info("[EXPORT START]", extra={"out": settings.out})
        with profile_block("export") as stats:
            with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pg-porter-export") as pool:
                future = pool.submit(copy_to_csv, conn, settings.sql, settings.out)
                try:
                    rows = wait_for(future, interval=interval, echo=echo)
                except BaseException:
                    if not future.done():
                        # The worker only returns once the server stops the COPY.
                        log.warning("[EXPORT CANCEL] stopping server-side COPY")
                        future.cancel()
                        conn.cancel_safe()
                    raise
    finally:
        conn.close()

    log.info(
        "[EXPORT SUCCESS]",
        extra={
            "rows": rows,
            "out": settings.out,
            "duration": round(stats.duration_seconds, 2),
            "peak_rss_bytes": stats.peak_rss_bytes,
        },
    )
    return ExportResult(
        sql=settings.sql,
        out=settings.out,
        rows=rows,
        elapsed_seconds=stats.duration_seconds,
        peak_rss_bytes=stats.peak_rss_bytes,
    )


__all__ = ["run_export"]
