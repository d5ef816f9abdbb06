"""Layered configuration service for fractal-explore.

Priority (highest to lowest):
1. CLI flags (--port, --dir, --no-cache), applied by the command itself
2. Environment variables (FRACTAL_EXPLORE_*), including a ``.env`` file
3. Project config (.fractal-explore.toml in the current directory)
4. Global config (~/.config/fractal-explore/config.toml)
5. Built-in defaults
"""
from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli_w
from dotenv import load_dotenv

from fractal_explore.constants import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    FALLBACK_COMPONENT_DIR,
)
from fractal_explore.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger("fractal_explore.config")

PROJECT_CONFIG_NAME = ".fractal-explore.toml"

DEFAULTS: dict[str, Any] = {
    "server": {
        "port": DEFAULT_PORT,
        "host": DEFAULT_HOST,
    },
    "scan": {
        "components_dir": FALLBACK_COMPONENT_DIR,
        "cache": True,
        "exclude": list(DEFAULT_EXCLUDE_PATTERNS),
    },
    "ui": {
        "plain_output": False,
    },
}

ENV_VAR_MAP = {
    "FRACTAL_EXPLORE_PORT": "server.port",
    "FRACTAL_EXPLORE_HOST": "server.host",
    "FRACTAL_EXPLORE_DIR": "scan.components_dir",
    "FRACTAL_EXPLORE_CACHE": "scan.cache",
    "FRACTAL_EXPLORE_PLAIN": "ui.plain_output",
}

# Only these accept true/false spellings from the environment
BOOLEAN_KEYS = {"scan.cache", "ui.plain_output"}


def _global_config_dir() -> Path:
    """Return the global config directory: ~/.config/fractal-explore/."""
    return Path.home() / ".config" / "fractal-explore"


def _global_config_path() -> Path:
    return _global_config_dir() / "config.toml"


def _project_config_path() -> Path:
    return Path.cwd() / PROJECT_CONFIG_NAME


def _read_toml(path: Path) -> dict:
    """Read a TOML file, returning empty dict if missing or unreadable."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}


def _write_toml(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base (override wins)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(data: dict, dotted_key: str, default: Any = None) -> Any:
    current = data
    for key in dotted_key.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(key)
        if current is None:
            return default
    return current


def _set_nested(data: dict, dotted_key: str, value: Any) -> None:
    keys = dotted_key.split(".")
    current = data
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _coerce_env(config_path: str, value: str) -> Any:
    if config_path not in BOOLEAN_KEYS:
        return value
    if value.lower() in ("true", "1", "yes"):
        return True
    if value.lower() in ("false", "0", "no"):
        return False
    return value


def validate_port(value: Any) -> int:
    """Return ``value`` as a TCP port number or raise ConfigError."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid port: {value!r}", context={"port": value})
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {value!r}", context={"port": value}) from None
    if not 1 <= port <= 65535:
        raise ConfigError(
            f"Port {port} is out of range (1-65535)", context={"port": port}
        )
    return port


@dataclass
class ResolvedConfig:
    """Fully resolved configuration after merging all layers."""
    data: dict = field(default_factory=dict)
    global_config_path: Optional[Path] = None
    project_config_path: Optional[Path] = None

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return _get_nested(self.data, dotted_key, default)


class ConfigService:
    """Layered configuration service.

    Resolves config from environment variables, the project config, the
    global config and built-in defaults, in that order of precedence.
    """

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        if self._resolved is not None and not force:
            return self._resolved

        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.is_file():
            load_dotenv(dotenv_path)
            logger.debug("Loaded environment from %s", dotenv_path)

        merged = copy.deepcopy(DEFAULTS)

        global_path = _global_config_path()
        global_data = _read_toml(global_path)
        if global_data:
            merged = _deep_merge(merged, global_data)
            logger.debug("Loaded global config from %s", global_path)

        project_path = _project_config_path()
        project_data = _read_toml(project_path)
        if project_data:
            merged = _deep_merge(merged, project_data)
            logger.debug("Loaded project config from %s", project_path)

        for env_var, config_path in ENV_VAR_MAP.items():
            env_value = os.environ.get(env_var)
            if env_value is not None:
                _set_nested(merged, config_path, _coerce_env(config_path, env_value))

        self._resolved = ResolvedConfig(
            data=merged,
            global_config_path=global_path if global_path.is_file() else None,
            project_config_path=project_path if project_path.is_file() else None,
        )
        return self._resolved

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    def get_port(self) -> int:
        return validate_port(self.get("server.port", DEFAULT_PORT))

    def get_host(self) -> str:
        return str(self.get("server.host", DEFAULT_HOST))

    def get_components_dir(self) -> str:
        return str(self.get("scan.components_dir", FALLBACK_COMPONENT_DIR))

    def cache_enabled(self) -> bool:
        value = self.get("scan.cache", True)
        if not isinstance(value, bool):
            raise ConfigError(
                f"scan.cache must be true or false, got {value!r}",
                context={"key": "scan.cache"},
            )
        return value

    def get_exclude_patterns(self) -> list[str]:
        return list(self.get("scan.exclude", list(DEFAULT_EXCLUDE_PATTERNS)))

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Set a value in the global config file."""
        path = _global_config_path()
        data = _read_toml(path)
        _set_nested(data, dotted_key, value)
        _write_toml(data, path)
        self._resolved = None
        logger.info("Set %s = %s in %s", dotted_key, value, path)

    def init_project_config(self) -> Path:
        """Create a .fractal-explore.toml in the current directory."""
        path = _project_config_path()
        if path.exists():
            raise ConfigError(
                f"Project config already exists: {path}", context={"path": str(path)}
            )

        data = {
            "server": {"port": DEFAULT_PORT},
            "scan": {"components_dir": FALLBACK_COMPONENT_DIR, "cache": True},
        }
        _write_toml(data, path)
        self._resolved = None
        logger.info("Created project config: %s", path)
        return path

    def show(self) -> dict:
        resolved = self.resolve(force=True)
        return {
            "resolved": resolved.data,
            "sources": {
                "global_config": str(resolved.global_config_path) if resolved.global_config_path else None,
                "project_config": str(resolved.project_config_path) if resolved.project_config_path else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Return all config file locations and their existence status."""
        global_path = _global_config_path()
        project_path = _project_config_path()
        return {
            "global_config": f"{global_path} ({'exists' if global_path.is_file() else 'not found'})",
            "project_config": f"{project_path} ({'exists' if project_path.is_file() else 'not found'})",
        }


# Module-level singleton
_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Get or create the global ConfigService instance."""
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (useful for testing)."""
    global _config_service
    _config_service = None
