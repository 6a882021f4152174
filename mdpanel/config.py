"""
Settings of Markdown Panel.

Settings live in a YAML file (mdpanel.yaml in the working directory by
default, or the path in $MDPANEL_CONFIG). A missing file means defaults;
unknown keys are rejected so that typos do not go unnoticed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .include.expander import DEFAULT_MAX_DEPTH

CONFIG_FILE = "mdpanel.yaml"
CONFIG_ENV = "MDPANEL_CONFIG"

DEFAULT_SUPPORTED_EXT = "md,mkd,mdwn,mdown,mdtxt,markdown,txt"
RENDERING_ENGINES = ("memory", "file")

_yaml = YAML(typ="safe")


def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ConfigError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key} must be a boolean, got: {value!r}")


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got: {value!r}") from None


def _as_opt_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got: {value!r}")
    return value or None


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings.

    supported_extensions: comma-separated list without dots ("md,markdown").
    html_file: if set, every render also writes the export variant there.
    rendering_engine: display surface variant: "memory" or "file".
    """
    supported_extensions: str = DEFAULT_SUPPORTED_EXT
    allow_all_extensions: bool = False
    css_file: Optional[str] = None
    css_dark_file: Optional[str] = None
    dark_mode: bool = False
    html_file: Optional[str] = None
    zoom_level: int = 100
    rendering_engine: str = "memory"
    preview_file: Optional[str] = None
    open_browser: bool = False
    include_max_depth: int = DEFAULT_MAX_DEPTH

    @property
    def extension_list(self) -> List[str]:
        return [e.strip().lstrip(".").lower() for e in self.supported_extensions.split(",") if e.strip()]

    def is_valid_extension(self, filename: Optional[Path | str]) -> bool:
        if self.allow_all_extensions:
            return True
        if not filename:
            return False
        ext = Path(filename).suffix.lower().lstrip(".")
        return bool(ext) and ext in self.extension_list

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Settings:
        if not d:
            return Settings()
        if not isinstance(d, dict):
            raise ConfigError("settings must be a mapping")
        _assert_only_keys(d, [f.name for f in fields(Settings)], ctx="Settings")

        exts = d.get("supported_extensions", DEFAULT_SUPPORTED_EXT)
        if isinstance(exts, (list, tuple)):
            exts = ",".join(str(x) for x in exts)
        if not isinstance(exts, str):
            raise ConfigError(f"supported_extensions must be a string or a list, got: {exts!r}")

        engine = d.get("rendering_engine", "memory")
        if engine not in RENDERING_ENGINES:
            raise ConfigError(f"rendering_engine must be one of {'|'.join(RENDERING_ENGINES)}, got: {engine!r}")

        zoom = _as_int(d.get("zoom_level", 100), "zoom_level")
        if zoom <= 0:
            raise ConfigError(f"zoom_level must be positive, got: {zoom}")
        depth = _as_int(d.get("include_max_depth", DEFAULT_MAX_DEPTH), "include_max_depth")
        if depth < 0:
            raise ConfigError(f"include_max_depth must be >= 0, got: {depth}")

        return Settings(
            supported_extensions=exts,
            allow_all_extensions=_as_bool(d.get("allow_all_extensions", False), "allow_all_extensions"),
            css_file=_as_opt_str(d.get("css_file"), "css_file"),
            css_dark_file=_as_opt_str(d.get("css_dark_file"), "css_dark_file"),
            dark_mode=_as_bool(d.get("dark_mode", False), "dark_mode"),
            html_file=_as_opt_str(d.get("html_file"), "html_file"),
            zoom_level=zoom,
            rendering_engine=engine,
            preview_file=_as_opt_str(d.get("preview_file"), "preview_file"),
            open_browser=_as_bool(d.get("open_browser", False), "open_browser"),
            include_max_depth=depth,
        )


def settings_path(explicit: Optional[Path | str] = None) -> Path:
    """Explicit path → $MDPANEL_CONFIG → ./mdpanel.yaml."""
    if explicit:
        return Path(explicit)
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return Path.cwd() / CONFIG_FILE


def load_settings(path: Optional[Path | str] = None) -> Settings:
    """
    Reads settings from YAML.

    A missing default file yields defaults; an explicitly requested file
    that does not exist is an error.
    """
    p = settings_path(path)
    if not p.is_file():
        if path:
            raise ConfigError(f"Config file not found: {p}")
        return Settings()
    try:
        raw = _yaml.load(p.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {p}")
    try:
        return Settings.from_dict(raw)
    except ConfigError as e:
        raise ConfigError(f"{p}: {e}") from e


__all__ = ["Settings", "load_settings", "settings_path", "CONFIG_FILE", "CONFIG_ENV"]
