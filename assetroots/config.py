"""Configuration loading for assetroots (.assetroots.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".assetroots.yml"
DEFAULT_OUTPUT_ROOT = "bazel-out/k8-fastbuild/bin"
OUTPUT_FORMATS = ("json", "text")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AssetRootsConfig:
    """Represents the settings defined in .assetroots.yml."""

    root: Path
    output_root: str = DEFAULT_OUTPUT_ROOT
    output_format: str = "json"
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> AssetRootsConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AssetRootsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AssetRootsConfig(root=root)

    output_root = _as_str(data.get("output_root"))
    if output_root is not None:
        config.output_root = output_root.strip("/")

    output_format = _as_str(data.get("output_format"))
    if output_format is not None:
        output_format = output_format.lower()
        if output_format not in OUTPUT_FORMATS:
            allowed = ", ".join(OUTPUT_FORMATS)
            raise ConfigError(f"output_format must be one of {allowed}, got '{output_format}'")
        config.output_format = output_format

    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = root / log_file

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
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


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None
