"""
Configuration for pg-porter.

Each connection field is resolved independently through the override chain:
non-empty command-line flag, then environment variable (or the dotenv settings
file), then the hard-coded default. The environment tier is a Pydantic Settings
model; the resolved result is an immutable `Settings` record.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pg_porter.errors import ConfigError

DEFAULT_ENV_FILE = ".env"
DEFAULT_TIMEOUT = "180"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class EnvSettings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: str = Field("5432", alias="DB_PORT")
    db_user: str = Field("", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASS", repr=False)
    db_name: str = Field("", alias="DB_NAME")
    db_sslmode: str = Field("prefer", alias="DB_SSLMODE")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )


def load_env_settings(env_file: Optional[str | Path] = None) -> EnvSettings:
    """
    Read the environment tier, falling back to the dotenv file for unset names.

    A missing settings file is not an error; a malformed value is a ConfigError.
    """
    try:
        return EnvSettings(_env_file=env_file or DEFAULT_ENV_FILE)
    except ValidationError as exc:
        raise ConfigError(f"invalid environment settings: {exc}") from exc


class Settings(BaseModel):
    """
    Resolved, read-only settings for one export.
    """

    sql: str
    out: str
    timeout: int
    dsn: str = ""
    user: str = ""
    db_name: str = ""
    host: str = ""
    port: str = ""
    password: str = Field("", repr=False)
    sslmode: str = ""

    model_config = ConfigDict(frozen=True)

    def build_dsn(self) -> str:
        """
        Return the explicit DSN verbatim, or compose one from the parts.

        The password is percent-encoded so reserved characters cannot break the
        URI structure.
        """
        if self.dsn:
            return self.dsn
        return (
            f"postgres://{self.user}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.db_name}?sslmode={self.sslmode}"
        )

    def describe_target(self) -> str:
        """Password-free description of the connection target, for logs."""
        if self.dsn:
            return "explicit DSN"
        return f"{self.user}@{self.host}:{self.port}/{self.db_name} (sslmode={self.sslmode})"


def flag_or_env(flag_value: Optional[str], env_value: str) -> str:
    """
    Apply one step of the override chain.

    `env_value` already carries the default when the variable is unset.
    """
    if flag_value:
        return flag_value
    return env_value


def parse_timeout(raw: str) -> int:
    """Parse a plain ASCII decimal integer, optionally signed."""
    if not isinstance(raw, str) or not _INTEGER_RE.fullmatch(raw):
        raise ConfigError(f"error converting timeout to int: {raw!r}")
    timeout = int(raw)
    if timeout <= 0:
        raise ConfigError(f"timeout must be a positive number of seconds, got {timeout}")
    return timeout


def resolve_settings(
    sql: str = "",
    out: str = "",
    dsn: str = "",
    user: str = "",
    db_name: str = "",
    host: str = "",
    port: str = "",
    password: str = "",
    sslmode: str = "",
    timeout: str = DEFAULT_TIMEOUT,
    env: Optional[EnvSettings] = None,
) -> Settings:
    """
    Merge flag values with the environment tier and validate the result.

    Raises
    ------
    ConfigError
        On a malformed timeout or a missing required field.
    """
    parsed_timeout = parse_timeout(timeout)
    env = env if env is not None else load_env_settings()

    user = flag_or_env(user, env.db_user)
    db_name = flag_or_env(db_name, env.db_name)

    if not dsn:
        if not user:
            raise ConfigError("database user is required (-U or DB_USER)")
        if not db_name:
            raise ConfigError("database name is required (-d or DB_NAME)")
    if not sql:
        raise ConfigError("sql command is required (-sql)")
    if not out:
        raise ConfigError("output file path is required (-out)")

    return Settings(
        sql=sql,
        out=out,
        timeout=parsed_timeout,
        dsn=dsn,
        user=user,
        db_name=db_name,
        host=flag_or_env(host, env.db_host),
        port=flag_or_env(port, env.db_port),
        password=flag_or_env(password, env.db_password),
        sslmode=flag_or_env(sslmode, env.db_sslmode),
    )


__all__ = [
    "EnvSettings",
    "Settings",
    "flag_or_env",
    "load_env_settings",
    "parse_timeout",
    "resolve_settings",
]
