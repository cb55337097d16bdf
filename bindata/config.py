"""Configuration loading for bindata (.bindata.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .discovery import InputConfig
from .emitters import DEFAULT_REGISTRY, registry_package
from .errors import BindataError
from .strategy import Strategy

CONFIG_FILENAME = ".bindata.yml"
DEFAULT_OUTPUT = "bindata.go"

_GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigError(BindataError):
    """Raised when the configuration is malformed or inconsistent."""


@dataclass
class BindataConfig:
    """Settings for one generation run."""

    package: str = "main"
    output: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    prefix: Optional[str] = None
    no_compress: bool = False
    no_memcopy: bool = False
    tags: Optional[str] = None
    ignore: List[str] = field(default_factory=list)
    inputs: List[InputConfig] = field(default_factory=list)
    mode: Optional[int] = None
    modtime: Optional[int] = None
    registry: Optional[str] = DEFAULT_REGISTRY
    templates_dir: Optional[Path] = None

    @property
    def strategy(self) -> Strategy:
        return Strategy.from_flags(no_compress=self.no_compress, no_memcopy=self.no_memcopy)

    def validate(self) -> None:
        """Check the settings and resolve a directory ``output`` to a file path."""
        if not self.package or not _GO_IDENTIFIER.match(self.package):
            raise ConfigError(f"Invalid package name: {self.package!r}")
        if not self.inputs:
            raise ConfigError("No input paths specified")
        for item in self.inputs:
            if not Path(item.path).exists():
                raise ConfigError(f"Input path not found: {item.path}")
        if not str(self.output):
            raise ConfigError("No output file specified")
        if self.output.is_dir():
            self.output = self.output / DEFAULT_OUTPUT
        for pattern in self.ignore:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"Invalid ignore pattern {pattern!r}: {exc}") from exc
        if self.registry and not _GO_IDENTIFIER.match(registry_package(self.registry)):
            raise ConfigError(
                f"Registry import path {self.registry!r} does not end in a valid Go package name"
            )
        if self.mode is not None and not 0 <= self.mode <= 0xFFFFFFFF:
            raise ConfigError(f"Mode out of range: {self.mode}")


def load_config(config_path: Path) -> BindataConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return BindataConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = BindataConfig()
    package = _as_str(data.get("package"))
    if package:
        config.package = package
    output = _as_str(data.get("output"))
    if output:
        config.output = root / output
    prefix = _as_str(data.get("prefix"))
    if prefix:
        config.prefix = str(root / prefix)

    config.no_compress = _as_bool(data.get("no_compress")) or False
    config.no_memcopy = _as_bool(data.get("no_memcopy")) or False
    config.tags = _as_str(data.get("tags"))
    config.ignore = _as_str_list(data.get("ignore"))
    config.inputs = [
        _resolve_input(InputConfig.parse(raw), root) for raw in _as_str_list(data.get("inputs"))
    ]
    config.mode = _as_int(data.get("mode"))
    config.modtime = _as_int(data.get("modtime"))

    if "registry" in data:
        registry = data.get("registry")
        config.registry = _as_str(registry) if registry else None

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    return config_path


def _resolve_input(item: InputConfig, root: Path) -> InputConfig:
    path = Path(item.path)
    if path.is_absolute():
        return item
    return InputConfig(path=str(root / path), recursive=item.recursive)


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
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            # Accept "0644" style octal as well as plain integers.
            return int(value, 8) if value.startswith("0") and value.isdigit() else int(value, 0)
        except ValueError as exc:
            raise ConfigError(f"Expected an integer, got {value!r}") from exc
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
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["BindataConfig", "CONFIG_FILENAME", "ConfigError", "load_config"]
