from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError

FETCH_POLICIES = ("warn", "strict")

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "package-lock.json",
    "yarn.lock",
    "*.log",
    "node_modules",
    ".env*",
)


@dataclass(frozen=True)
class ReportConfig:
    remote: str = "origin"
    fetch_policy: str = "strict"
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    status_date_format: str = "%Y-%m-%d %H:%M:%S"
    timestamp_format: str = "%Y%m%d-%H%M%S"


def load_report_config(path: Path) -> ReportConfig:
    """Read remote/fetch/date settings from a TOML file.

    ``exclude_patterns`` always keeps its default.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise ConfigError(f"Config file not found: {path}") from error
    except tomllib.TOMLDecodeError as error:
        raise ConfigError(f"Invalid TOML in {path}: {error}") from error

    defaults = ReportConfig()
    remote = str(data.get("remote") or defaults.remote).strip()
    if not remote:
        raise ConfigError("report config 'remote' must not be empty")

    fetch_policy = str(data.get("fetch_policy") or defaults.fetch_policy).strip().lower()
    if fetch_policy not in FETCH_POLICIES:
        raise ConfigError(f"report config 'fetch_policy' must be one of {', '.join(FETCH_POLICIES)}")

    status_date_format = str(data.get("status_date_format") or defaults.status_date_format)

    return ReportConfig(
        remote=remote,
        fetch_policy=fetch_policy,
        status_date_format=status_date_format,
    )
