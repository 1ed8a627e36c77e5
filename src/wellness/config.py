"""Wellness tracker configuration loading and validation.

Reads ``wellness.toml``, resolves ``${VAR}`` environment references, and
returns a validated ``WellnessConfig`` dataclass. Every section is optional;
missing sections fall back to defaults suitable for local development.
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wellness.db import DEFAULT_DB_NAME, normalize_schema_name

CONFIG_ENV_VAR = "WELLNESS_CONFIG"
DEFAULT_CONFIG_FILENAME = "wellness.toml"

# Pattern matching ${VAR_NAME}: alphanumeric + underscore variable names.
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_HEADER_NAME_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


class ConfigError(Exception):
    """Raised when configuration is missing, malformed, or invalid."""


@dataclass
class LoggingConfig:
    """Logging configuration from the [logging] section."""

    level: str = "INFO"
    format: str = "text"  # "text" or "json"
    log_root: str | None = None


@dataclass
class DatabaseConfig:
    """Database configuration from the [database] section.

    Host and credentials are deliberately absent: they come from
    ``DATABASE_URL`` / ``POSTGRES_*`` (see ``wellness.db.db_params_from_env``).
    """

    name: str = DEFAULT_DB_NAME
    schema: str | None = None
    min_pool_size: int = 1
    max_pool_size: int = 5


@dataclass
class ApiConfig:
    """HTTP API configuration from the [api] section."""

    host: str = "127.0.0.1"
    port: int = 8400
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])


@dataclass
class IdentityConfig:
    """Caller identity resolution from the [identity] section.

    ``default_user_id`` enables single-user mode: requests without the
    identity header are attributed to that user instead of being rejected.
    """

    user_header: str = "X-User-Id"
    default_user_id: str | None = None


@dataclass
class WellnessConfig:
    """Fully parsed wellness tracker configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    identity: IdentityConfig = field(default_factory=IdentityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def resolve_env_vars(value: Any) -> Any:
    """Recursively resolve ``${VAR_NAME}`` references in config values.

    Walks dicts, lists, and strings. Non-string leaves pass through.

    Raises
    ------
    ConfigError
        If a referenced environment variable is not set.
    """
    if isinstance(value, dict):
        return {k: resolve_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [resolve_env_vars(item) for item in value]

    if isinstance(value, str):
        return _resolve_string(value)

    return value


def _resolve_string(s: str) -> str:
    """Replace all ``${VAR_NAME}`` occurrences in *s*, reporting every missing var at once."""
    missing: list[str] = []

    def _replace(match: re.Match) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            missing.append(var_name)
            return match.group(0)
        return env_value

    result = _ENV_VAR_PATTERN.sub(_replace, s)

    if missing:
        raise ConfigError(
            f"Unresolved environment variable(s) in config value: {', '.join(missing)} "
            f"(original: {s!r})"
        )

    return result


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _positive_int(section: dict[str, Any], key: str, default: int, path: str) -> int:
    raw = section.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {path}: {raw!r}. Must be an integer.") from exc
    if value <= 0:
        raise ConfigError(f"Invalid {path}: {value!r}. Must be a positive integer.")
    return value


def _parse_database(section: dict[str, Any]) -> DatabaseConfig:
    name = str(section.get("name", DEFAULT_DB_NAME)).strip()
    if not name:
        raise ConfigError("database.name must be a non-empty string")

    raw_schema = section.get("schema")
    if raw_schema is not None and not isinstance(raw_schema, str):
        raise ConfigError("database.schema must be a string when set")
    try:
        schema = normalize_schema_name(raw_schema)
    except ValueError as exc:
        raise ConfigError(f"Invalid database.schema: {exc}") from exc

    min_size = _positive_int(section, "min_pool_size", 1, "database.min_pool_size")
    max_size = _positive_int(section, "max_pool_size", 5, "database.max_pool_size")
    if min_size > max_size:
        raise ConfigError(
            f"database.min_pool_size ({min_size}) exceeds database.max_pool_size ({max_size})"
        )
    return DatabaseConfig(name=name, schema=schema, min_pool_size=min_size, max_pool_size=max_size)


def _parse_api(section: dict[str, Any]) -> ApiConfig:
    port = _positive_int(section, "port", 8400, "api.port")
    if port > 65535:
        raise ConfigError(f"Invalid api.port: {port!r}. Must be at most 65535.")
    origins = section.get("cors_origins", ["http://localhost:5173"])
    if not isinstance(origins, list) or not all(isinstance(o, str) for o in origins):
        raise ConfigError("api.cors_origins must be a list of strings")
    return ApiConfig(host=str(section.get("host", "127.0.0.1")), port=port, cors_origins=origins)


def _parse_identity(section: dict[str, Any]) -> IdentityConfig:
    header = str(section.get("user_header", "X-User-Id")).strip()
    if not _HEADER_NAME_PATTERN.fullmatch(header):
        raise ConfigError(f"Invalid identity.user_header: {header!r}")
    default_user = section.get("default_user_id")
    if default_user is not None:
        default_user = str(default_user).strip() or None
    return IdentityConfig(user_header=header, default_user_id=default_user)


def _parse_logging(section: dict[str, Any]) -> LoggingConfig:
    level = str(section.get("level", "INFO")).upper()
    fmt = str(section.get("format", "text")).lower()
    if fmt not in ("text", "json"):
        raise ConfigError(f"Invalid logging.format: {fmt!r}. Expected 'text' or 'json'.")
    return LoggingConfig(level=level, format=fmt, log_root=section.get("log_root"))


def parse_config(data: dict[str, Any]) -> WellnessConfig:
    """Build a ``WellnessConfig`` from already-decoded TOML data."""
    data = resolve_env_vars(data)
    return WellnessConfig(
        database=_parse_database(_section(data, "database")),
        api=_parse_api(_section(data, "api")),
        identity=_parse_identity(_section(data, "identity")),
        logging=_parse_logging(_section(data, "logging")),
    )


def load_config(path: Path | None = None) -> WellnessConfig:
    """Load and validate the wellness configuration.

    Resolution order: explicit *path*, then ``$WELLNESS_CONFIG``, then
    ``./wellness.toml``. When no path was given and no file exists, the
    defaults are returned.

    Raises
    ------
    ConfigError
        If an explicitly requested file is missing, contains invalid TOML,
        or holds invalid values.
    """
    explicit = path is not None or CONFIG_ENV_VAR in os.environ
    if path is None:
        path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILENAME))

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return WellnessConfig()

    try:
        data = tomllib.loads(path.read_bytes().decode())
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    return parse_config(data)
