from __future__ import annotations

import sys

import typer

from pg_porter.config import DEFAULT_ENV_FILE, DEFAULT_TIMEOUT, load_env_settings, resolve_settings
from pg_porter.errors import PorterError
from pg_porter.orchestrator import run_export
from pg_porter.reporter import print_summary
from pg_porter.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Export the result of a PostgreSQL query to a CSV file via COPY.")

log = get_logger(__name__)


@app.command()
def export(
    sql: str = typer.Option("", "-sql", help="SQL query whose result set is exported."),
    out: str = typer.Option("", "-out", help="Output CSV file path (overwritten)."),
    dsn: str = typer.Option(
        "",
        "-dsn",
        help="Full connection string; when set, the individual connection flags are ignored.",
    ),
    user: str = typer.Option("", "-U", help="Database user [env: DB_USER]."),
    db_name: str = typer.Option("", "-d", help="Database name [env: DB_NAME]."),
    host: str = typer.Option("", "-H", help="Database host [env: DB_HOST, default: localhost]."),
    port: str = typer.Option("", "-p", help="Database port [env: DB_PORT, default: 5432]."),
    password: str = typer.Option("", "-W", help="Database password [env: DB_PASS]."),
    sslmode: str = typer.Option(
        "",
        "-sslmode",
        help="SSL mode (disable, allow, prefer, require, verify-ca, verify-full) "
        "[env: DB_SSLMODE, default: prefer].",
    ),
    timeout: str = typer.Option(DEFAULT_TIMEOUT, "-timeout", help="Connection timeout in seconds."),
    env_file: str = typer.Option(
        DEFAULT_ENV_FILE, "-env-file", help="Settings file consulted for unset DB_* variables."
    ),
) -> None:
    """
    Run the query through server-side COPY and stream the CSV to -out.
    """
    configure_logging()

    try:
        env = load_env_settings(env_file)
        configure_logging(level=env.log_level, json_logs=env.log_json)
        settings = resolve_settings(
            sql=sql,
            out=out,
            dsn=dsn,
            user=user,
            db_name=db_name,
            host=host,
            port=port,
            password=password,
            sslmode=sslmode,
            timeout=timeout,
            env=env,
        )
        result = run_export(settings)
    except PorterError as exc:
        log.error(str(exc))
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt as exc:
        typer.echo("Cancelled by user.", err=True)
        raise typer.Exit(code=130) from exc

    print_summary(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
