"""Embed files into generated Go source with round-trip fidelity."""

from .config import BindataConfig, ConfigError, load_config
from .convert import translate, write_source
from .discovery import InputConfig, find_assets, safe_function_name
from .errors import BindataError, EncodeError, InputUnavailableError
from .models import Asset, FileInfo
from .release import write_release
from .strategy import Strategy, select_emitter

__all__ = [
    "Asset",
    "BindataConfig",
    "BindataError",
    "ConfigError",
    "EncodeError",
    "FileInfo",
    "InputConfig",
    "InputUnavailableError",
    "Strategy",
    "find_assets",
    "load_config",
    "safe_function_name",
    "select_emitter",
    "translate",
    "write_release",
    "write_source",
]
