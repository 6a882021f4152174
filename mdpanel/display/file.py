"""
File display surface: writes the display page to a preview file that any
browser can show. A file cannot be patched in place, so patches are applied
to the in-memory page and the whole file is rewritten.
"""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path
from typing import Optional

from .memory import MemoryDisplay
from ..errors import DisplayError
from ..render.pipeline import RenderResult

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_NAME = ".mdpanel-preview.html"


class FileDisplay(MemoryDisplay):
    engine_name = "file"

    def __init__(self, preview_file: Optional[Path | str] = None, *, open_browser: bool = False) -> None:
        super().__init__(virtual_host=False)
        self._configured: Optional[Path] = Path(preview_file) if preview_file else None
        self.preview_file: Optional[Path] = self._configured
        self.open_browser = open_browser
        self.writes = 0

    def _target_for(self, result: RenderResult) -> Path:
        if self._configured is not None:
            return self._configured
        if result.source_path is not None:
            return result.source_path.parent / DEFAULT_PREVIEW_NAME
        return Path.cwd() / DEFAULT_PREVIEW_NAME

    def _flush(self, target: Path) -> None:
        if self.document is None:
            return
        try:
            target.write_text(self.document, encoding="utf-8")
        except OSError as e:
            raise DisplayError(f"Cannot write preview {target}: {e}") from e
        self.writes += 1
        logger.debug("preview written: %s", target)

    def _reload(self, result: RenderResult) -> None:
        super()._reload(result)
        target = self._target_for(result)
        self.preview_file = target
        self._flush(target)
        if self.open_browser:
            webbrowser.open(target.absolute().as_uri())

    def _patch_body(self, body_html: str) -> None:
        super()._patch_body(body_html)
        if self.preview_file is not None:
            self._flush(self.preview_file)

    def _patch_style(self, style_css: str) -> None:
        super()._patch_style(style_css)
        if self.preview_file is not None:
            self._flush(self.preview_file)


__all__ = ["FileDisplay", "DEFAULT_PREVIEW_NAME"]
