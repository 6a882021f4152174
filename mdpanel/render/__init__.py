"""
Render cycle: renderer collaborator, document assembly, pipeline and
single-slot scheduling.
"""

from __future__ import annotations

from .document import build_display_document, build_export_document, make_base_href
from .pipeline import RenderPipeline, RenderResult, export_html, load_css
from .renderer import MarkdownItRenderer, MarkdownRenderer
from .supervisor import RenderSupervisor

__all__ = [
    "MarkdownItRenderer",
    "MarkdownRenderer",
    "RenderPipeline",
    "RenderResult",
    "RenderSupervisor",
    "build_display_document",
    "build_export_document",
    "export_html",
    "load_css",
    "make_base_href",
]
