"""
Display surface contract.

A display surface shows the display variant of a RenderResult. Whether it
reloads the whole page or patches body/style in place is decided by
diff_strategy() against the state it currently shows; the state itself is
an immutable DisplayState that is replaced after every update.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..render.pipeline import RenderResult

logger = logging.getLogger(__name__)

VIRTUAL_HOST = "http://mdpanel-virtualhost"


class UpdateKind(enum.Enum):
    FULL_RELOAD = "full_reload"
    PATCH_BODY = "patch_body"
    PATCH_STYLE = "patch_style"
    PATCH_BODY_AND_STYLE = "patch_body_and_style"
    NO_CHANGE = "no_change"


@dataclass(frozen=True)
class DisplayState:
    """What a surface currently shows."""
    document_path: Optional[Path]
    body_html: str
    style_css: str

    @staticmethod
    def of(result: RenderResult) -> DisplayState:
        return DisplayState(result.source_path, result.body_html, result.style_css)


def diff_strategy(previous: Optional[DisplayState], next_state: DisplayState) -> UpdateKind:
    """
    FULL_RELOAD when nothing is shown yet or the document changed,
    otherwise the smallest patch that brings previous to next_state.
    """
    if previous is None or previous.document_path != next_state.document_path:
        return UpdateKind.FULL_RELOAD
    body_changed = previous.body_html != next_state.body_html
    style_changed = previous.style_css != next_state.style_css
    if body_changed and style_changed:
        return UpdateKind.PATCH_BODY_AND_STYLE
    if body_changed:
        return UpdateKind.PATCH_BODY
    if style_changed:
        return UpdateKind.PATCH_STYLE
    return UpdateKind.NO_CHANGE


def map_to_virtual_host(html_text: str, document_path: Optional[Path]) -> str:
    """
    Rewrites file URIs of the document directory into the virtual host,
    for surfaces that serve the directory under VIRTUAL_HOST.
    """
    if document_path is None:
        return html_text
    prefix = Path(document_path).parent.absolute().as_uri()
    return html_text.replace(prefix, VIRTUAL_HOST)


class DisplaySurface(ABC):
    """
    Capability set of a display variant:
    initialize / set_content / scroll_to_line / screenshot / set_zoom.

    Subclasses implement the primitive operations (_reload, _patch_body,
    _patch_style); set_content() picks among them.
    """

    engine_name: str = ""

    def __init__(self) -> None:
        self.state: Optional[DisplayState] = None
        self.zoom_level = 100
        self.initialized = False
        self.retypeset_requests = 0
        self.history: List[UpdateKind] = []

    def initialize(self, zoom_level: int = 100) -> None:
        self.zoom_level = zoom_level
        self.initialized = True

    def set_content(self, result: RenderResult) -> UpdateKind:
        if not self.initialized:
            logger.debug("%s: set_content before initialize, ignored", self.engine_name)
            return UpdateKind.NO_CHANGE

        new_state = DisplayState.of(result)
        kind = diff_strategy(self.state, new_state)
        logger.debug("%s: %s", self.engine_name, kind.value)

        if kind is UpdateKind.FULL_RELOAD:
            self._reload(result)
        else:
            if kind in (UpdateKind.PATCH_BODY, UpdateKind.PATCH_BODY_AND_STYLE):
                self._patch_body(result.body_html)
            if kind in (UpdateKind.PATCH_STYLE, UpdateKind.PATCH_BODY_AND_STYLE):
                self._patch_style(result.style_css)
            if kind is not UpdateKind.NO_CHANGE:
                # diagrams and math must be re-rendered after a DOM patch
                self.retypeset_requests += 1

        self.state = new_state
        self.history.append(kind)
        return kind

    def set_zoom(self, zoom_level: int) -> None:
        self.zoom_level = zoom_level

    @abstractmethod
    def scroll_to_line(self, line: int) -> None:
        ...

    def screenshot(self) -> Optional[bytes]:
        """Snapshot used to mask flicker during reloads; None if unsupported."""
        return None

    @abstractmethod
    def _reload(self, result: RenderResult) -> None:
        ...

    @abstractmethod
    def _patch_body(self, body_html: str) -> None:
        ...

    @abstractmethod
    def _patch_style(self, style_css: str) -> None:
        ...


__all__ = [
    "DisplayState",
    "DisplaySurface",
    "UpdateKind",
    "VIRTUAL_HOST",
    "diff_strategy",
    "map_to_virtual_host",
]
