"""
In-memory display surface.

Keeps the current page as a string and applies patches to it the way a
browser host would apply them to its DOM. The scripts a real host would run
(scroll, retypeset) are collected in `scripts`, so an embedding application
can forward them to its web view.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .base import DisplaySurface, map_to_virtual_host
from ..render.document import RETYPESET_SCRIPT, USER_STYLE_ID
from ..render.pipeline import RenderResult

_BODY = re.compile(r"(<body\b[^>]*>)(.*)(</body>)", re.IGNORECASE | re.DOTALL)
_USER_STYLE = re.compile(
    r"(<style\b[^>]*\bid=\"" + re.escape(USER_STYLE_ID) + r"\"[^>]*>)(.*?)(</style>)",
    re.IGNORECASE | re.DOTALL,
)

SCROLL_SCRIPT = (
    "var element = document.getElementById('{line}');\n"
    "var headerOffset = 10;\n"
    "var elementPosition = element.getBoundingClientRect().top;\n"
    "var offsetPosition = elementPosition + window.pageYOffset - headerOffset;\n"
    "window.scrollTo({{top: offsetPosition}});"
)


def replace_body(document: str, body_html: str) -> str:
    """Replaces everything between <body …> and </body>."""
    return _BODY.sub(lambda m: m.group(1) + "\n" + body_html + "\n" + m.group(3), document, count=1)


def replace_user_style(document: str, style_css: str) -> str:
    """Replaces the user stylesheet block of an assembled page."""
    return _USER_STYLE.sub(lambda m: m.group(1) + "\n" + style_css + "\n" + m.group(3), document, count=1)


class MemoryDisplay(DisplaySurface):
    engine_name = "memory"

    def __init__(self, *, virtual_host: bool = False) -> None:
        super().__init__()
        self.virtual_host = virtual_host
        self.document: Optional[str] = None
        self.scripts: List[str] = []
        self.scroll_line: Optional[int] = None

    def _map(self, html_text: str, result_path) -> str:
        return map_to_virtual_host(html_text, result_path) if self.virtual_host else html_text

    def _reload(self, result: RenderResult) -> None:
        self.document = self._map(result.html_for_display, result.source_path)

    def _patch_body(self, body_html: str) -> None:
        if self.document is None:
            return
        path = self.state.document_path if self.state else None
        self.document = replace_body(self.document, self._map(body_html, path))
        self.scripts.append(RETYPESET_SCRIPT)

    def _patch_style(self, style_css: str) -> None:
        if self.document is None:
            return
        self.document = replace_user_style(self.document, style_css)
        self.scripts.append(RETYPESET_SCRIPT)

    def scroll_to_line(self, line: int) -> None:
        line = max(0, int(line))
        self.scroll_line = line
        self.scripts.append(SCROLL_SCRIPT.format(line=line))


__all__ = ["MemoryDisplay", "replace_body", "replace_user_style", "SCROLL_SCRIPT"]
