"""Configuration objects and loading for the picture sync."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import requests
import yaml

from .models import Collection, RemotePicture

DEFAULT_CONFIG_FILE = "remote-pictures.yml"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_MODULES_DIR = "node_modules/remote-pictures"
DEFAULT_MODULE_SPECIFIER = "remote-pictures"
REMOTE_SUBDIR = "remote"
REQUEST_OPTIONS = frozenset(
    inspect.signature(requests.Session.request).parameters
) - {"self", "method", "url"}


class ConfigError(ValueError):
    """Raised when a configuration file or mapping has the wrong shape."""


@dataclass(frozen=True)
class SyncConfig:
    """Settings for a single sync invocation."""

    collections: Tuple[Collection, ...] = ()
    download_options: Dict[str, Any] = field(default_factory=dict)
    force_refresh: bool = False
    dev_mode: bool = False
    public_dir: Path = Path(DEFAULT_PUBLIC_DIR)
    modules_dir: Path = Path(DEFAULT_MODULES_DIR)
    module_specifier: str = DEFAULT_MODULE_SPECIFIER

    @property
    def asset_dir(self) -> Path:
        return self.public_dir / REMOTE_SUBDIR


def dev_mode_from_env() -> bool:
    """Whether the MODE environment variable marks a development build."""
    return os.getenv("MODE") == "development"


def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{where}: '{key}' must be a non-empty string")
    return value


def _parse_collection(data: Any, index: int) -> Collection:
    where = f"collections[{index}]"
    if not isinstance(data, Mapping):
        raise ConfigError(f"{where}: expected a mapping")
    collection_id = _require_str(data, "id", where)
    raw_pictures = data.get("pictures") or []
    if not isinstance(raw_pictures, list):
        raise ConfigError(f"{where}: 'pictures' must be a list")

    pictures = []
    for pic_index, raw in enumerate(raw_pictures):
        pic_where = f"{where}.pictures[{pic_index}]"
        if not isinstance(raw, Mapping):
            raise ConfigError(f"{pic_where}: expected a mapping")
        pictures.append(
            RemotePicture(
                id=_require_str(raw, "id", pic_where),
                url=_require_str(raw, "url", pic_where),
            )
        )
    return Collection(id=collection_id, pictures=tuple(pictures))


def config_from_mapping(
    data: Mapping[str, Any],
    *,
    force_refresh: bool = False,
    dev_mode: Optional[bool] = None,
) -> SyncConfig:
    """Build a SyncConfig from parsed YAML/JSON data."""
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    raw_collections = data.get("collections")
    if not isinstance(raw_collections, list):
        raise ConfigError("'collections' must be a list")
    collections = tuple(
        _parse_collection(raw, index) for index, raw in enumerate(raw_collections)
    )

    download_options = data.get("download_options") or {}
    if not isinstance(download_options, Mapping):
        raise ConfigError("'download_options' must be a mapping")
    unknown = sorted(str(key) for key in download_options if key not in REQUEST_OPTIONS)
    if unknown:
        raise ConfigError(
            f"'download_options' has unsupported keys: {', '.join(unknown)}"
        )

    return SyncConfig(
        collections=collections,
        download_options=dict(download_options),
        force_refresh=force_refresh,
        dev_mode=dev_mode_from_env() if dev_mode is None else dev_mode,
        public_dir=Path(data.get("public_dir") or DEFAULT_PUBLIC_DIR),
        modules_dir=Path(data.get("modules_dir") or DEFAULT_MODULES_DIR),
        module_specifier=data.get("module_specifier") or DEFAULT_MODULE_SPECIFIER,
    )


def load_config(
    path: Path,
    *,
    force_refresh: bool = False,
    dev_mode: Optional[bool] = None,
) -> SyncConfig:
    """Read a YAML (or JSON) configuration file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse configuration {path}: {exc}") from exc
    return config_from_mapping(
        data or {}, force_refresh=force_refresh, dev_mode=dev_mode
    )
