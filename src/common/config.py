"""Locating and loading YAML configuration, and holding the active config."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

import yaml

T = TypeVar("T")

YAML_SUFFIXES = (".yaml", ".yml")


def find_config_path(
    config_name: Optional[str],
    config_dir: Path,
    default_name: str = "prod",
    env_var: Optional[str] = None,
) -> Path:
    """
    Resolve a config name to a YAML file.

    ``config_name`` may be a name looked up as ``<config_dir>/<name>.yaml`` or
    a path to a YAML file. When it is None, ``env_var`` (if set in the
    environment) and then ``default_name`` are used instead.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
    """
    name = config_name
    if name is None:
        name = os.environ.get(env_var, default_name) if env_var else default_name

    path = Path(name) if name.endswith(YAML_SUFFIXES) else config_dir / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    return path


def load_yaml(path: Path) -> Any:
    """Parse a YAML file; an empty file loads as {}."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return {} if data is None else data


class ConfigSingleton(Generic[T]):
    """Process-wide config holder, loaded on first ``get()`` unless ``set()`` first."""

    def __init__(self, loader: Optional[Callable[[], T]] = None):
        self._loader = loader
        self._value: Optional[T] = None
        self._lock = threading.Lock()

    def get(self) -> T:
        with self._lock:
            if self._value is None:
                if self._loader is None:
                    raise RuntimeError("Config has not been set and there is no loader")
                self._value = self._loader()
            return self._value

    def set(self, config: T) -> None:
        with self._lock:
            self._value = config

    def reset(self) -> None:
        with self._lock:
            self._value = None
