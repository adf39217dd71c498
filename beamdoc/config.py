"""Configuration loading for beamdoc (.beamdoc.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".beamdoc.yml"
PATH_ENV_VAR = "BEAMDOC_PATH"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CacheConfig:
    """Decode cache settings."""

    enabled: bool = True


@dataclass
class ServiceConfig:
    """HTTP service bind settings."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class BeamDocConfig:
    """Represents the settings defined in .beamdoc.yml."""

    root: Path
    search_paths: List[Path] = field(default_factory=list)
    language: str = "en"
    summary_max_length: int = 100
    cache: CacheConfig = field(default_factory=CacheConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> BeamDocConfig:
    """Load configuration from disk, layering BEAMDOC_PATH on top."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    env = os.environ if environ is None else environ

    config = BeamDocConfig(root=root)
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        _apply(config, data)

    env_paths = _split_env_paths(env.get(PATH_ENV_VAR))
    if env_paths:
        config.search_paths = env_paths + [
            path for path in config.search_paths if path not in env_paths
        ]
    return config


def _apply(config: BeamDocConfig, data: Dict[str, Any]) -> None:
    config.search_paths = [
        _anchor(config.root, entry) for entry in _as_str_list(data.get("search_paths"))
    ]

    language = _as_str(data.get("language"))
    if language:
        config.language = language

    summary_max_length = _as_int(data.get("summary_max_length"))
    if summary_max_length is not None:
        if summary_max_length <= 0:
            raise ConfigError("summary_max_length must be a positive integer")
        config.summary_max_length = summary_max_length

    cache_data = _as_dict(data.get("cache"))
    enabled = _as_bool(cache_data.get("enabled"))
    if enabled is not None:
        config.cache.enabled = enabled

    service_data = _as_dict(data.get("service"))
    host = _as_str(service_data.get("host"))
    if host:
        config.service.host = host
    port = _as_int(service_data.get("port"))
    if port is not None:
        config.service.port = port


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _anchor(root: Path, entry: str) -> Path:
    path = Path(entry).expanduser()
    if not path.is_absolute():
        path = root / path
    return path


def _split_env_paths(value: Optional[str]) -> List[Path]:
    if not value:
        return []
    return [Path(part).expanduser() for part in value.split(os.pathsep) if part.strip()]


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BeamDocConfig",
    "CacheConfig",
    "ConfigError",
    "ServiceConfig",
    "load_config",
]
