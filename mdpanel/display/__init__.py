"""
Display surfaces. The variant is chosen once at startup from
Settings.rendering_engine; the preprocessing code never depends on it.
"""

from __future__ import annotations

from .base import DisplayState, DisplaySurface, UpdateKind, diff_strategy, map_to_virtual_host
from .file import FileDisplay
from .memory import MemoryDisplay
from ..config import Settings


def create_display(settings: Settings) -> DisplaySurface:
    """Builds and initializes the configured display variant."""
    if settings.rendering_engine == "file":
        surface: DisplaySurface = FileDisplay(settings.preview_file, open_browser=settings.open_browser)
    else:
        surface = MemoryDisplay()
    surface.initialize(settings.zoom_level)
    return surface


__all__ = [
    "DisplayState",
    "DisplaySurface",
    "FileDisplay",
    "MemoryDisplay",
    "UpdateKind",
    "create_display",
    "diff_strategy",
    "map_to_virtual_host",
]
