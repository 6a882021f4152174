"""
One render cycle: source text → RenderResult.

    extension check → CSS → include expansion → renderer (display, export)
    → document assembly

The cycle is synchronous and touches the file system only for reads
(includes, CSS). Writing the export artifact is a separate step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from .document import build_display_document, build_export_document, unsupported_extension_body
from .renderer import MarkdownItRenderer, MarkdownRenderer
from ..config import Settings
from ..errors import ExportError
from ..include.expander import IncludeExpander

logger = logging.getLogger(__name__)

DEFAULT_CSS = "style.css"
DEFAULT_DARK_CSS = "style-dark.css"


@dataclass(frozen=True)
class RenderResult:
    """Immutable product of one render cycle."""
    html_for_display: str
    html_for_export: str
    body_html: str
    style_css: str
    source_path: Optional[Path] = None


def _packaged_css(name: str) -> str:
    return resources.files("mdpanel.resources").joinpath(name).read_text(encoding="utf-8")


def load_css(settings: Settings) -> str:
    """Custom stylesheet if it exists, otherwise the packaged default."""
    custom = settings.css_dark_file if settings.dark_mode else settings.css_file
    if custom:
        p = Path(custom).expanduser()
        if p.is_file():
            return p.read_text(encoding="utf-8")
        logger.warning("CSS file not found, using default: %s", p)
    return _packaged_css(DEFAULT_DARK_CSS if settings.dark_mode else DEFAULT_CSS)


class RenderPipeline:
    """
    Stateless between calls: every render() returns a fresh RenderResult.
    """

    def __init__(self, settings: Optional[Settings] = None, renderer: Optional[MarkdownRenderer] = None):
        self.settings = settings or Settings()
        self.renderer: MarkdownRenderer = renderer or MarkdownItRenderer()
        self.expander = IncludeExpander(max_depth=self.settings.include_max_depth)

    def render(self, text: str, source_path: Optional[Path | str] = None) -> RenderResult:
        path = Path(source_path).absolute() if source_path else None
        title = path.name if path else ""
        css = load_css(self.settings)

        # text without a file (stdin) has no extension to check
        if path is not None and not self.settings.is_valid_extension(path):
            logger.info("unsupported file extension: %s", path)
            body = unsupported_extension_body(title, self.settings.supported_extensions)
            page = build_export_document(body, title=title, style_css=css)
            return RenderResult(page, page, body, css, path)

        expanded = self.expander.expand(text, path)

        body_display = self.renderer.render(expanded, path, True)
        body_export = self.renderer.render(expanded, None, False)

        return RenderResult(
            html_for_display=build_display_document(body_display, title=title, style_css=css, source_path=path),
            html_for_export=build_export_document(body_export, title=title, style_css=css),
            body_html=body_display,
            style_css=css,
            source_path=path,
        )

    def render_file(self, path: Path | str) -> RenderResult:
        p = Path(path)
        return self.render(p.read_text(encoding="utf-8"), p)


def export_html(result: RenderResult, target: Path | str) -> Path:
    """
    Writes the export variant verbatim. An I/O failure stops this export
    only; it is reported as ExportError.
    """
    p = Path(target)
    try:
        p.write_text(result.html_for_export, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Cannot write {p}: {e}") from e
    logger.debug("exported %s", p)
    return p


__all__ = ["RenderPipeline", "RenderResult", "export_html", "load_css"]
