from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from things_cli.constants import (
    APP_NAME,
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_PATH,
    DEFAULT_SCRIPT_TIMEOUT_SECONDS,
)
from things_cli.models import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThingsConfig:
    auth_token: str | None = None
    app_name: str = APP_NAME
    timeout_seconds: float = DEFAULT_SCRIPT_TIMEOUT_SECONDS


def _coerce_timeout(value: Any) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SCRIPT_TIMEOUT_SECONDS
    return parsed if parsed > 0 else DEFAULT_SCRIPT_TIMEOUT_SECONDS


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _read_config_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Error loading config %s: %s", path, exc)
        return {}
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", path)
        return {}
    return loaded


def load_config(path: Path) -> ThingsConfig:
    """Load ``path``; a missing or unreadable file yields the defaults."""
    raw = _read_config_mapping(path)
    token = raw.get("auth_token")
    if token is not None:
        token = str(token).strip() or None
    app_name = str(raw.get("app_name") or APP_NAME).strip() or APP_NAME
    return ThingsConfig(
        auth_token=token,
        app_name=app_name,
        timeout_seconds=_coerce_timeout(raw.get("timeout_seconds", DEFAULT_SCRIPT_TIMEOUT_SECONDS)),
    )


def save_config(config: ThingsConfig, path: Path) -> None:
    payload = {
        "auth_token": config.auth_token,
        "app_name": config.app_name,
        "timeout_seconds": config.timeout_seconds,
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not save config to {path}: {exc}") from exc


def with_auth_token(config: ThingsConfig, token: str | None) -> ThingsConfig:
    cleaned = (token or "").strip() or None
    return replace(config, auth_token=cleaned)
